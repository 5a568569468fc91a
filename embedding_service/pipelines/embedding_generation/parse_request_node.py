from typing import TYPE_CHECKING
import logging
from langsmith import traceable

from embedding_service.config import Settings
from embedding_service.errors import EmbeddingPipelineError
from embedding_service.models.request_models import parse_entity_reference

if TYPE_CHECKING:
    from embedding_service.models.pipeline_models import EmbeddingPipelineState

logger = logging.getLogger(__name__)

@traceable(name="parse_request")
def parse_request_node(state: 'EmbeddingPipelineState', settings: Settings) -> 'EmbeddingPipelineState':
    """
    Validate the request body and resolve the entity's table/field descriptor
    Nothing touches the network or the store before this node succeeds
    """
    try:
        reference = parse_entity_reference(state.get("request_body"), settings.entity_types)

        state["entity_type"] = reference.entity_type
        state["entity_id"] = reference.entity_id
        state["entity_config"] = settings.entities[reference.entity_type]
        state["pipeline_step"] = "request_parsed"

        logger.info(f"Embedding requested for {reference.entity_type} {reference.entity_id}")
        return state

    except EmbeddingPipelineError as e:
        logger.warning(f"Rejected embedding request: {e.message}")
        state["error"] = e
        state["pipeline_step"] = "error"
        return state
