from typing import List, Any, Optional
from time import monotonic
import json
import logging

import httpx
import numpy as np

from embedding_service.config import Settings
from embedding_service.errors import ProviderBadResponse, ProviderError, ProviderTimeout

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider:
    """
    Client for the Gemini embedContent endpoint
    One authenticated POST per call, bounded by a timeout, no retries
    """

    def __init__(self, api_key: str,
                 model: str = "embedding-001",
                 api_base: str = "https://generativelanguage.googleapis.com/v1",
                 task_type: str = "RETRIEVAL_DOCUMENT",
                 timeout: float = 15.0,
                 client: Optional[httpx.Client] = None):
        if not api_key:
            raise ValueError("GEMINI_API_KEY must be set in environment variables")

        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.task_type = task_type
        self.timeout = timeout
        self.client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiEmbeddingProvider":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.embedding_model,
            api_base=settings.embedding_api_base,
            task_type=settings.embedding_task_type,
            timeout=settings.provider_timeout_seconds,
        )

    @property
    def url(self) -> str:
        return f"{self.api_base}/models/{self.model}:embedContent"

    def embed(self, text: str) -> List[float]:
        """
        Generate an embedding vector for text

        The timeout applies to each transport phase (connect, write, read)
        and also as an overall deadline measured from the start of the call:
        once it passes, reading the response stops and the call is abandoned.

        Raises:
            ProviderTimeout: the call did not finish within the timeout
            ProviderError: transport failure or non-success status
            ProviderBadResponse: the body does not hold a well-formed vector
        """
        payload = {
            "model": self.model,
            "content": {"parts": [{"text": text}]},
            "taskType": self.task_type,
        }
        deadline = monotonic() + self.timeout

        try:
            with self.client.stream(
                "POST",
                self.url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            ) as response:
                content = self._read_before_deadline(response, deadline)
        except httpx.TimeoutException as e:
            logger.warning(f"Embedding request timed out after {self.timeout}s")
            raise ProviderTimeout(f"Embedding provider did not respond within {self.timeout} seconds") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"{type(e).__name__}: {str(e)}") from e

        if not response.is_success:
            detail = self._error_detail(content)
            logger.warning(f"Embedding provider returned {response.status_code}: {detail}")
            raise ProviderError(detail, upstream_status=response.status_code)

        try:
            body = json.loads(content)
        except ValueError as e:
            raise ProviderBadResponse("Invalid embedding response format: body is not JSON") from e

        return parse_embedding_values(body)

    def _read_before_deadline(self, response: httpx.Response, deadline: float) -> bytes:
        chunks = []
        if monotonic() > deadline:
            raise self._deadline_exceeded()
        for chunk in response.iter_bytes():
            if monotonic() > deadline:
                raise self._deadline_exceeded()
            chunks.append(chunk)
        return b"".join(chunks)

    def _deadline_exceeded(self) -> ProviderTimeout:
        logger.warning(f"Embedding response not received within {self.timeout}s")
        return ProviderTimeout(f"Embedding provider did not respond within {self.timeout} seconds")

    @staticmethod
    def _error_detail(content: bytes) -> str:
        raw_text = content.decode("utf-8", errors="replace")
        try:
            error_json = json.loads(content)
        except ValueError:
            return raw_text or "Unknown error"

        if isinstance(error_json, dict):
            error = error_json.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return raw_text or "Unknown error"


def parse_embedding_values(body: Any) -> List[float]:
    """
    Extract embedding.values from a provider response body

    The vector must be a non-empty list of finite numbers (booleans rejected).
    """
    embedding = body.get("embedding") if isinstance(body, dict) else None
    values = embedding.get("values") if isinstance(embedding, dict) else None

    if not isinstance(values, list):
        raise ProviderBadResponse("Invalid embedding response format: missing embedding.values")

    if len(values) == 0:
        raise ProviderBadResponse("Invalid embedding response format: empty embedding vector")

    if not all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in values):
        raise ProviderBadResponse("Invalid embedding response format: embedding contains non-numeric values")

    vector = np.asarray(values, dtype=np.float64)
    if not np.all(np.isfinite(vector)):
        raise ProviderBadResponse("Invalid embedding response format: embedding contains non-finite values")

    return vector.tolist()
