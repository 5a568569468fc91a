from typing import TYPE_CHECKING
import logging
from langsmith import traceable

from embedding_service.config import Settings
from embedding_service.errors import EmptyContent
from embedding_service.services.text_content import bound_text, flatten_value

if TYPE_CHECKING:
    from embedding_service.models.pipeline_models import EmbeddingPipelineState

logger = logging.getLogger(__name__)

@traceable(name="prepare_text")
def prepare_text_node(state: 'EmbeddingPipelineState', settings: Settings) -> 'EmbeddingPipelineState':
    """
    Flatten the fetched content into plain text and cap its length

    Truncation past max_text_length is silent; text that is blank after
    truncation is an error.
    """
    text = flatten_value(state.get("raw_content"))
    text, was_truncated = bound_text(text, settings.max_text_length)

    if not text.strip():
        logger.warning(f"No embeddable text for {state['entity_type']} {state['entity_id']}")
        state["error"] = EmptyContent(
            f"No content to embed for {state['entity_type']} {state['entity_id']}"
        )
        state["pipeline_step"] = "error"
        return state

    if was_truncated:
        logger.info(f"Truncated text for {state['entity_type']} {state['entity_id']} "
                    f"to {settings.max_text_length} characters")

    logger.debug(f"Text for {state['entity_type']} {state['entity_id']}: {text[:100]}...")

    state["text"] = text
    state["was_truncated"] = was_truncated
    state["pipeline_step"] = "text_prepared"
    return state
