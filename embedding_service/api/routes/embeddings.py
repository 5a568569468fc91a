# API Routes for entity embedding generation
from functools import lru_cache
from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from embedding_service.config import get_settings
from embedding_service.errors import ConfigurationError, InvalidInput
from embedding_service.pipelines.embedding_orchestrator import EmbeddingPipelineOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

PIPELINE_PATHS = ["/", "/generate-embeddings", "/generate-task-embeddings", "/generate-ticket-embeddings"]


@lru_cache(maxsize=1)
def _build_orchestrator() -> EmbeddingPipelineOrchestrator:
    return EmbeddingPipelineOrchestrator.from_settings(get_settings())


def get_orchestrator() -> EmbeddingPipelineOrchestrator:
    try:
        return _build_orchestrator()
    except ValueError as e:
        logger.error(f"Embedding pipeline is not configured: {str(e)}")
        raise ConfigurationError("Server configuration missing (API Keys)") from e


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        raise InvalidInput("Invalid JSON body") from e


def _entity_body(body: Any, id_key: str, entity_type: str) -> Any:
    """Map a per-entity body such as {"task_id": 42} onto the unified request shape"""
    if not isinstance(body, dict):
        return body
    return {"entity_type": entity_type, "entity_id": body.get(id_key)}


async def _run_pipeline(orchestrator: EmbeddingPipelineOrchestrator, body: Any) -> JSONResponse:
    status_code, payload = await run_in_threadpool(orchestrator.generate_embedding, body)
    return JSONResponse(status_code=status_code, content=payload, headers=CORS_HEADERS)


@router.post("/")
@router.post("/generate-embeddings")
async def generate_embeddings(request: Request,
                              orchestrator: EmbeddingPipelineOrchestrator = Depends(get_orchestrator)):
    """
    Generate and store the embedding for one entity

    Body: {"entity_type": "meeting"|"task"|"ticket", "entity_id": ...}
    or the legacy {"meeting_id": ...}
    """
    body = await _read_json_body(request)
    return await _run_pipeline(orchestrator, body)


@router.post("/generate-task-embeddings")
async def generate_task_embeddings(request: Request,
                                   orchestrator: EmbeddingPipelineOrchestrator = Depends(get_orchestrator)):
    """Per-entity form: {"task_id": ...}"""
    body = await _read_json_body(request)
    return await _run_pipeline(orchestrator, _entity_body(body, "task_id", "task"))


@router.post("/generate-ticket-embeddings")
async def generate_ticket_embeddings(request: Request,
                                     orchestrator: EmbeddingPipelineOrchestrator = Depends(get_orchestrator)):
    """Per-entity form: {"ticket_id": ...}"""
    body = await _read_json_body(request)
    return await _run_pipeline(orchestrator, _entity_body(body, "ticket_id", "ticket"))


def preflight() -> PlainTextResponse:
    return PlainTextResponse("ok", headers=CORS_HEADERS)


for _path in PIPELINE_PATHS:
    router.add_api_route(_path, preflight, methods=["OPTIONS"], include_in_schema=False)


def error_response(status_code: int, payload: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload, headers=CORS_HEADERS)
