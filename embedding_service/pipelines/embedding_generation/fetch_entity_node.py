from typing import TYPE_CHECKING
import logging
from langsmith import traceable

from embedding_service.errors import EmbeddingPipelineError

if TYPE_CHECKING:
    from embedding_service.database.supabase_client import SupabaseEntityStore
    from embedding_service.models.pipeline_models import EmbeddingPipelineState

logger = logging.getLogger(__name__)

@traceable(name="fetch_entity")
def fetch_entity_node(state: 'EmbeddingPipelineState', store: 'SupabaseEntityStore') -> 'EmbeddingPipelineState':
    """
    Read the configured text field of the requested entity
    """
    config = state["entity_config"]

    try:
        state["raw_content"] = store.fetch_field(config.table, config.text_field, state["entity_id"])
        state["pipeline_step"] = "entity_fetched"

        logger.info(f"Fetched {config.table}.{config.text_field} for {state['entity_type']} {state['entity_id']}")
        return state

    except EmbeddingPipelineError as e:
        logger.warning(f"Could not fetch {state['entity_type']} {state['entity_id']}: {e.message}")
        state["error"] = e
        state["pipeline_step"] = "error"
        return state
