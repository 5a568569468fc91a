from typing import TYPE_CHECKING
import logging
from langsmith import traceable

from embedding_service.errors import EmbeddingPipelineError

if TYPE_CHECKING:
    from embedding_service.database.supabase_client import SupabaseEntityStore
    from embedding_service.models.pipeline_models import EmbeddingPipelineState

logger = logging.getLogger(__name__)

@traceable(name="store_embedding")
def store_embedding_node(state: 'EmbeddingPipelineState', store: 'SupabaseEntityStore') -> 'EmbeddingPipelineState':
    """
    Persist the generated vector onto the entity row

    A failure here leaves the row untouched; the caller decides whether to resubmit.
    """
    config = state["entity_config"]

    try:
        store.update_field(config.table, config.embedding_field, state["entity_id"], state["embedding"])
        state["pipeline_step"] = "completed"

        logger.info(f"Successfully updated {state['entity_type']} {state['entity_id']} with embedding")
        return state

    except EmbeddingPipelineError as e:
        logger.error(f"Error updating {state['entity_type']} {state['entity_id']} with embedding: {e.message}")
        state["error"] = e
        state["pipeline_step"] = "error"
        return state
