# Pipeline models
from .pipeline_models import EmbeddingPipelineState

# Request/Response models
from .request_models import EntityReference, normalize_entity_id, parse_entity_reference
from .response_models import EmbeddingSuccessResponse, ErrorResponse

__all__ = [
    "EmbeddingPipelineState",
    "EntityReference",
    "normalize_entity_id",
    "parse_entity_reference",
    "EmbeddingSuccessResponse",
    "ErrorResponse"
]
