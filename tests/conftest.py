"""
Shared fixtures: in-memory doubles for the entity store and the
embedding provider, and a test client wired to them.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from embedding_service.config import Settings
from embedding_service.errors import NotFound
from embedding_service.pipelines.embedding_orchestrator import EmbeddingPipelineOrchestrator


class FakeEntityStore:
    """Dict-backed store keyed by (table, id) that records every call."""

    def __init__(self, rows: Optional[Dict[Tuple[str, str], Dict[str, Any]]] = None):
        self.rows = rows or {}
        self.fetch_calls: List[Tuple[str, str, str]] = []
        self.update_calls: List[Tuple[str, str, str, Any]] = []
        self.fetch_error: Optional[Exception] = None
        self.update_error: Optional[Exception] = None

    def fetch_field(self, table, field, entity_id):
        self.fetch_calls.append((table, field, entity_id))
        if self.fetch_error:
            raise self.fetch_error
        row = self.rows.get((table, entity_id))
        if row is None:
            raise NotFound(f"Error fetching {table} {entity_id}: No row found")
        if row.get(field) is None:
            raise NotFound(f"Error fetching {table} {entity_id}: No content found")
        return row[field]

    def update_field(self, table, field, entity_id, value):
        self.update_calls.append((table, field, entity_id, value))
        if self.update_error:
            raise self.update_error
        self.rows[(table, entity_id)][field] = value


class FakeEmbeddingProvider:
    """Returns a fixed vector (or raises a configured error) and records inputs."""

    def __init__(self, vector: Optional[List[float]] = None, error: Optional[Exception] = None):
        self.vector = vector if vector is not None else [0.1, 0.2, 0.3]
        self.error = error
        self.calls: List[str] = []

    def embed(self, text):
        self.calls.append(text)
        if self.error:
            raise self.error
        return list(self.vector)


@pytest.fixture
def settings():
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_role_key="service-role-key",
        gemini_api_key="gemini-key",
    )


@pytest.fixture
def store():
    return FakeEntityStore({
        ("tasks", "42"): {"description": "Fix bug"},
        ("tickets", "9"): {"description": "Login page returns 500"},
        ("meetings", "7"): {
            "meeting_summary_json": {
                "summary": "Quarterly planning",
                "action_items": ["ship release", "review budget"],
            }
        },
    })


@pytest.fixture
def provider():
    return FakeEmbeddingProvider(vector=[0.1, 0.2])


@pytest.fixture
def orchestrator(settings, store, provider):
    return EmbeddingPipelineOrchestrator(settings=settings, store=store, provider=provider)


@pytest.fixture
def client(orchestrator):
    from embedding_service.api.main import app
    from embedding_service.api.routes.embeddings import get_orchestrator

    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
