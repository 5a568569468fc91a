# Runtime configuration for the embedding service
import os
import json
import logging
from functools import lru_cache
from typing import Dict, Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class EntityConfig(BaseModel):
    """Where an entity's text lives and where its embedding is written"""
    model_config = ConfigDict(frozen=True)

    table: str = Field(..., min_length=1)
    text_field: str = Field(..., min_length=1)
    embedding_field: str = Field(..., min_length=1)


DEFAULT_ENTITY_CONFIG: Dict[str, EntityConfig] = {
    "meeting": EntityConfig(
        table="meetings",
        text_field="meeting_summary_json",
        embedding_field="summary_embedding",
    ),
    "task": EntityConfig(
        table="tasks",
        text_field="description",
        embedding_field="description_embedding",
    ),
    "ticket": EntityConfig(
        table="tickets",
        text_field="description",
        embedding_field="description_embedding",
    ),
}


class Settings(BaseModel):
    """
    Process-wide settings, built once at startup and handed to the
    store, provider and orchestrator explicitly.
    """
    model_config = ConfigDict(frozen=True)

    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    embedding_model: str = "embedding-001"
    embedding_api_base: str = "https://generativelanguage.googleapis.com/v1"
    embedding_task_type: str = "RETRIEVAL_DOCUMENT"
    provider_timeout_seconds: float = Field(15.0, gt=0)
    max_text_length: int = Field(8000, gt=0)

    log_level: str = "INFO"
    entities: Dict[str, EntityConfig] = Field(default_factory=lambda: dict(DEFAULT_ENTITY_CONFIG))

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables (after loading a .env file)

        Args:
            env: Optional mapping used instead of os.environ (tests)

        Raises:
            ValueError: if a numeric or JSON variable is malformed
        """
        if env is None:
            load_dotenv()
            env = dict(os.environ)

        values: Dict[str, Any] = {
            "supabase_url": env.get("SUPABASE_URL") or None,
            "supabase_service_role_key": env.get("SUPABASE_SERVICE_ROLE_KEY") or None,
            "gemini_api_key": env.get("GEMINI_API_KEY") or None,
            "entities": _load_entity_config(env.get("EMBEDDING_ENTITY_CONFIG")),
        }

        optional_vars = {
            "embedding_model": "EMBEDDING_MODEL",
            "embedding_api_base": "EMBEDDING_API_BASE",
            "embedding_task_type": "EMBEDDING_TASK_TYPE",
            "provider_timeout_seconds": "EMBEDDING_TIMEOUT_SECONDS",
            "max_text_length": "EMBEDDING_MAX_TEXT_LENGTH",
            "log_level": "LOG_LEVEL",
        }
        for field_name, var_name in optional_vars.items():
            if env.get(var_name):
                values[field_name] = env[var_name]

        try:
            return cls(**values)
        except ValidationError as e:
            raise ValueError(f"Invalid embedding service configuration: {e}") from e

    @property
    def entity_types(self):
        return frozenset(self.entities.keys())

    def log_credential_status(self) -> None:
        """Log which credentials are present without revealing them"""
        credentials = {
            "GEMINI_API_KEY": self.gemini_api_key,
            "SUPABASE_URL": self.supabase_url,
            "SUPABASE_SERVICE_ROLE_KEY": self.supabase_service_role_key,
        }
        for name, value in credentials.items():
            logger.info(f"{name}: {'Loaded' if value else 'Missing'}")


def _load_entity_config(raw: Optional[str]) -> Dict[str, EntityConfig]:
    """Merge EMBEDDING_ENTITY_CONFIG (a JSON object) over the default entity set"""
    entities = dict(DEFAULT_ENTITY_CONFIG)
    if not raw:
        return entities

    try:
        extra = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"EMBEDDING_ENTITY_CONFIG is not valid JSON: {e}") from e

    if not isinstance(extra, dict):
        raise ValueError("EMBEDDING_ENTITY_CONFIG must be a JSON object")

    for entity_type, descriptor in extra.items():
        if not isinstance(descriptor, dict):
            raise ValueError(f"Entity config for '{entity_type}' must be an object")
        try:
            entities[entity_type] = EntityConfig(**descriptor)
        except ValidationError as e:
            raise ValueError(f"Invalid entity config for '{entity_type}': {e}") from e

    return entities


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
