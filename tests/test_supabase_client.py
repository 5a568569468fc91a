"""
Unit tests for the Supabase-backed entity store.

The supabase client's fluent query builder is replaced with MagicMock chains.
"""

from unittest.mock import MagicMock, patch

import pytest

from embedding_service.config import Settings
from embedding_service.database.supabase_client import SupabaseEntityStore
from embedding_service.errors import NotFound, StoreError


def select_chain(client):
    return client.table.return_value.select.return_value.eq.return_value.execute


def update_chain(client):
    return client.table.return_value.update.return_value.eq.return_value.execute


class TestSupabaseEntityStoreInit:
    """Tests for store construction."""

    def test_requires_credentials(self):
        with pytest.raises(ValueError):
            SupabaseEntityStore.from_settings(Settings(supabase_url="https://example.supabase.co"))

    def test_creates_client_from_settings(self):
        settings = Settings(supabase_url="https://example.supabase.co", supabase_service_role_key="role-key")

        with patch("embedding_service.database.supabase_client.create_client") as mock_create:
            store = SupabaseEntityStore.from_settings(settings)

        mock_create.assert_called_once_with("https://example.supabase.co", "role-key")
        assert store.client is mock_create.return_value


class TestFetchField:
    """Tests for fetch_field."""

    @pytest.fixture
    def client(self):
        return MagicMock()

    def test_returns_field_value(self, client):
        select_chain(client).return_value = MagicMock(data=[{"description": "Fix bug"}])
        store = SupabaseEntityStore(client)

        assert store.fetch_field("tasks", "description", "42") == "Fix bug"

        client.table.assert_called_once_with("tasks")
        client.table.return_value.select.assert_called_once_with("description")
        client.table.return_value.select.return_value.eq.assert_called_once_with("id", "42")

    def test_returns_structured_value(self, client):
        summary = {"summary": "Plan", "items": ["a"]}
        select_chain(client).return_value = MagicMock(data=[{"meeting_summary_json": summary}])
        store = SupabaseEntityStore(client)

        assert store.fetch_field("meetings", "meeting_summary_json", "7") == summary

    def test_no_rows_is_not_found(self, client):
        select_chain(client).return_value = MagicMock(data=[])
        store = SupabaseEntityStore(client)

        with pytest.raises(NotFound, match="No row found"):
            store.fetch_field("tasks", "description", "42")

    def test_null_field_is_not_found(self, client):
        select_chain(client).return_value = MagicMock(data=[{"description": None}])
        store = SupabaseEntityStore(client)

        with pytest.raises(NotFound, match="No content found"):
            store.fetch_field("tasks", "description", "42")

    def test_absent_field_is_not_found(self, client):
        select_chain(client).return_value = MagicMock(data=[{}])
        store = SupabaseEntityStore(client)

        with pytest.raises(NotFound):
            store.fetch_field("tasks", "description", "42")

    def test_empty_string_is_returned(self, client):
        select_chain(client).return_value = MagicMock(data=[{"description": ""}])
        store = SupabaseEntityStore(client)

        assert store.fetch_field("tasks", "description", "42") == ""

    def test_multiple_rows_is_store_error(self, client):
        select_chain(client).return_value = MagicMock(data=[{"description": "a"}, {"description": "b"}])
        store = SupabaseEntityStore(client)

        with pytest.raises(StoreError):
            store.fetch_field("tasks", "description", "42")

    def test_client_failure_is_store_error(self, client):
        select_chain(client).side_effect = RuntimeError("permission denied for table tasks")
        store = SupabaseEntityStore(client)

        with pytest.raises(StoreError, match="permission denied"):
            store.fetch_field("tasks", "description", "42")


class TestUpdateField:
    """Tests for update_field."""

    @pytest.fixture
    def client(self):
        return MagicMock()

    def test_writes_value(self, client):
        update_chain(client).return_value = MagicMock(data=[{"id": 42}])
        store = SupabaseEntityStore(client)

        store.update_field("tasks", "description_embedding", "42", [0.1, 0.2])

        client.table.assert_called_once_with("tasks")
        client.table.return_value.update.assert_called_once_with({"description_embedding": [0.1, 0.2]})
        client.table.return_value.update.return_value.eq.assert_called_once_with("id", "42")

    def test_no_rows_updated_is_store_error(self, client):
        update_chain(client).return_value = MagicMock(data=[])
        store = SupabaseEntityStore(client)

        with pytest.raises(StoreError, match="no rows updated"):
            store.update_field("tasks", "description_embedding", "42", [0.1])

    def test_client_failure_is_store_error(self, client):
        update_chain(client).side_effect = RuntimeError("connection reset")
        store = SupabaseEntityStore(client)

        with pytest.raises(StoreError, match="connection reset"):
            store.update_field("tasks", "description_embedding", "42", [0.1])
