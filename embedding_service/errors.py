# Error taxonomy for the embedding pipeline
from typing import Optional


class EmbeddingPipelineError(Exception):
    """Base class for every failure the embedding handler reports to its caller"""

    error_type = "EmbeddingPipelineError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message, "error_type": self.error_type}


class InvalidInput(EmbeddingPipelineError):
    error_type = "InvalidInput"


class NotFound(EmbeddingPipelineError):
    error_type = "NotFound"


class EmptyContent(EmbeddingPipelineError):
    error_type = "EmptyContent"


class ProviderTimeout(EmbeddingPipelineError):
    error_type = "ProviderTimeout"


class ProviderError(EmbeddingPipelineError):
    """Non-success answer (or transport failure) from the embedding provider"""

    error_type = "ProviderError"

    def __init__(self, detail: str, upstream_status: Optional[int] = None):
        super().__init__(f"Error generating embedding: {detail}")
        self.detail = detail
        self.upstream_status = upstream_status


class ProviderBadResponse(EmbeddingPipelineError):
    error_type = "ProviderBadResponse"


class StoreError(EmbeddingPipelineError):
    error_type = "StoreError"


class ConfigurationError(EmbeddingPipelineError):
    """Required credentials or settings are missing at request time"""

    error_type = "ConfigurationError"
    status_code = 500
