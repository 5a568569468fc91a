# Pydantic models for outgoing API responses
from pydantic import BaseModel


class EmbeddingSuccessResponse(BaseModel):
    success: bool = True
    entity_type: str
    entity_id: str
    embedding_dimension: int


class ErrorResponse(BaseModel):
    """Uniform error envelope; error_type names the failure category"""
    error: str
    error_type: str
