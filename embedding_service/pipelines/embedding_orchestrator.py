# Entity Embedding Orchestrator
from typing import Dict, Any, Tuple
from datetime import datetime, timezone
import logging
from langgraph.graph import StateGraph, END

# LangSmith tracing
from langsmith import traceable

from embedding_service.config import Settings
from embedding_service.database.supabase_client import SupabaseEntityStore
from embedding_service.models.pipeline_models import EmbeddingPipelineState
from embedding_service.models.response_models import EmbeddingSuccessResponse, ErrorResponse
from embedding_service.services.embedding_provider import GeminiEmbeddingProvider
from embedding_service.pipelines.embedding_generation.parse_request_node import parse_request_node
from embedding_service.pipelines.embedding_generation.fetch_entity_node import fetch_entity_node
from embedding_service.pipelines.embedding_generation.prepare_text_node import prepare_text_node
from embedding_service.pipelines.embedding_generation.generate_embedding_node import generate_embedding_node
from embedding_service.pipelines.embedding_generation.store_embedding_node import store_embedding_node

logger = logging.getLogger(__name__)


def _continue_or_end(state: EmbeddingPipelineState) -> str:
    return "end" if state.get("error") is not None else "continue"


class EmbeddingPipelineOrchestrator:
    """
    Orchestrator for the entity embedding pipeline

    Pipeline Flow:
    1. Parse request (validate body, resolve entity config)
    2. Fetch entity text field from Supabase
    3. Flatten and bound the text
    4. Generate embedding with the provider
    5. Store the embedding on the entity row

    Any node that records an error ends the run, so later nodes
    (and their network/store calls) never execute.
    """

    def __init__(self, settings: Settings, store: SupabaseEntityStore, provider: GeminiEmbeddingProvider):
        self.settings = settings
        self.store = store
        self.provider = provider
        self.graph = self._build_graph()

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmbeddingPipelineOrchestrator":
        return cls(
            settings=settings,
            store=SupabaseEntityStore.from_settings(settings),
            provider=GeminiEmbeddingProvider.from_settings(settings),
        )

    def _build_graph(self):
        """Build the embedding LangGraph workflow"""
        workflow = StateGraph(EmbeddingPipelineState)

        workflow.add_node("parse_request", lambda state: parse_request_node(state, self.settings))
        workflow.add_node("fetch_entity", lambda state: fetch_entity_node(state, self.store))
        workflow.add_node("prepare_text", lambda state: prepare_text_node(state, self.settings))
        workflow.add_node("generate_embedding", lambda state: generate_embedding_node(state, self.provider))
        workflow.add_node("store_embedding", lambda state: store_embedding_node(state, self.store))

        workflow.set_entry_point("parse_request")
        steps = ["parse_request", "fetch_entity", "prepare_text", "generate_embedding", "store_embedding"]
        for current, following in zip(steps, steps[1:]):
            workflow.add_conditional_edges(current, _continue_or_end, {"continue": following, "end": END})
        workflow.add_edge("store_embedding", END)

        graph = workflow.compile()
        logger.info("Embedding LangGraph workflow compiled successfully")
        return graph

    @traceable(name="embedding_pipeline")
    def generate_embedding(self, request_body: Any) -> Tuple[int, Dict[str, Any]]:
        """
        Main entry point: run the pipeline for one request body

        Returns:
            (http_status, response_payload); never raises
        """
        start_time = datetime.now(timezone.utc)

        initial_state: EmbeddingPipelineState = {
            "request_body": request_body,
            "entity_type": None,
            "entity_id": None,
            "entity_config": None,
            "raw_content": None,
            "text": None,
            "was_truncated": False,
            "embedding": None,
            "pipeline_step": "initialized",
            "error": None,
            "execution_time": None
        }

        try:
            result = self.graph.invoke(initial_state)
        except Exception as e:
            logger.exception(f"Unexpected error in embedding pipeline: {str(e)}")
            return 500, ErrorResponse(error="Internal server error", error_type="InternalError").model_dump()

        execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
        error = result.get("error")

        if error is not None:
            logger.info(f"Embedding pipeline failed ({error.error_type}) in {execution_time:.2f}s")
            return error.status_code, error.to_dict()

        logger.info(f"Embedding pipeline completed for {result['entity_type']} {result['entity_id']} "
                    f"in {execution_time:.2f}s (text truncated: {result.get('was_truncated', False)})")

        response = EmbeddingSuccessResponse(
            entity_type=result["entity_type"],
            entity_id=result["entity_id"],
            embedding_dimension=len(result["embedding"]),
        )
        return 200, response.model_dump()
