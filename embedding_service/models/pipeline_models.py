from typing import Any, List, Optional
from typing_extensions import TypedDict

from embedding_service.config import EntityConfig
from embedding_service.errors import EmbeddingPipelineError


class EmbeddingPipelineState(TypedDict, total=False):
    """
    State object for the entity embedding pipeline
    Compatible with LangGraph's state handling
    """
    # Input
    request_body: Any

    # Resolved request
    entity_type: Optional[str]
    entity_id: Optional[str]
    entity_config: Optional[EntityConfig]

    # Pipeline data
    raw_content: Any
    text: Optional[str]
    was_truncated: bool
    embedding: Optional[List[float]]

    # Pipeline metadata
    pipeline_step: str
    error: Optional[EmbeddingPipelineError]
    execution_time: Optional[float]
