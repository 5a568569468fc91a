from typing import TYPE_CHECKING
import logging
from langsmith import traceable

from embedding_service.errors import EmbeddingPipelineError

if TYPE_CHECKING:
    from embedding_service.models.pipeline_models import EmbeddingPipelineState
    from embedding_service.services.embedding_provider import GeminiEmbeddingProvider

logger = logging.getLogger(__name__)

@traceable(name="generate_embedding")
def generate_embedding_node(state: 'EmbeddingPipelineState',
                            provider: 'GeminiEmbeddingProvider') -> 'EmbeddingPipelineState':
    """
    Call the embedding provider once with the prepared text
    """
    try:
        embedding = provider.embed(state["text"])

        state["embedding"] = embedding
        state["pipeline_step"] = "embedding_generated"

        logger.info(f"Embedding generated for {state['entity_type']} {state['entity_id']}, "
                    f"dimension: {len(embedding)}")
        return state

    except EmbeddingPipelineError as e:
        logger.warning(f"Embedding generation failed for {state['entity_type']} {state['entity_id']}: {e.message}")
        state["error"] = e
        state["pipeline_step"] = "error"
        return state
