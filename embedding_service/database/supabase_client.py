from supabase import create_client, Client
from typing import List, Any, Optional
import logging

from embedding_service.config import Settings
from embedding_service.errors import NotFound, StoreError

logger = logging.getLogger(__name__)


class SupabaseEntityStore:
    """
    Entity store backed by Supabase (PostgREST)
    Reads an entity's text field and writes its embedding field, keyed by "id"
    """

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseEntityStore":
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set in environment variables")

        return cls(create_client(settings.supabase_url, settings.supabase_service_role_key))

    def fetch_field(self, table: str, field: str, entity_id: str) -> Any:
        """
        Fetch a single field of exactly one row

        Args:
            table: Table to read from
            field: Column to select
            entity_id: Value of the row's id column

        Returns:
            The field's value (never None)

        Raises:
            NotFound: no matching row, or the field is absent/null
            StoreError: the query failed or matched more than one row
        """
        try:
            response = self.client.table(table).select(field).eq("id", entity_id).execute()
        except Exception as e:
            logger.error(f"Error fetching {table}.{field} for id {entity_id}: {str(e)}")
            raise StoreError(f"Error fetching {table} {entity_id}: {str(e)}") from e

        rows: List[dict] = response.data or []

        if len(rows) == 0:
            raise NotFound(f"Error fetching {table} {entity_id}: No row found")

        if len(rows) > 1:
            raise StoreError(f"Error fetching {table} {entity_id}: expected one row, got {len(rows)}")

        value: Optional[Any] = rows[0].get(field)
        if value is None:
            raise NotFound(f"Error fetching {table} {entity_id}: No content found")

        return value

    def update_field(self, table: str, field: str, entity_id: str, value: Any) -> None:
        """
        Write value into field for the row with the given id

        Raises:
            StoreError: the update failed or touched no row
        """
        try:
            response = self.client.table(table).update({field: value}).eq("id", entity_id).execute()
        except Exception as e:
            logger.error(f"Error updating {table}.{field} for id {entity_id}: {str(e)}")
            raise StoreError(f"Error updating {table} {entity_id} with embedding: {str(e)}") from e

        if not response.data:
            raise StoreError(f"Error updating {table} {entity_id} with embedding: no rows updated")

        logger.info(f"Updated {table}.{field} for id {entity_id}")
