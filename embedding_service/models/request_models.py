# Pydantic models and parsing for incoming embedding requests
import math
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict

from embedding_service.errors import InvalidInput


class EntityReference(BaseModel):
    """Normalized (entity_type, entity_id) pair; entity_id is always a string"""
    model_config = ConfigDict(frozen=True)

    entity_type: str
    entity_id: str


def normalize_entity_id(raw_id: Any) -> Optional[str]:
    """
    Normalize an entity id to the string used in store lookups

    Strings are stripped, integers and integral floats keep their integer
    form (7 and 7.0 both become "7"). Returns None for anything that is not
    a usable id: missing, null, booleans, blank strings, NaN/inf, objects
    and arrays.
    """
    if raw_id is None or isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, str):
        stripped = raw_id.strip()
        return stripped or None
    if isinstance(raw_id, int):
        return str(raw_id)
    if isinstance(raw_id, float):
        if not math.isfinite(raw_id):
            return None
        return str(int(raw_id)) if raw_id.is_integer() else str(raw_id)
    return None


def parse_entity_reference(body: Any, entity_types: Iterable[str]) -> EntityReference:
    """
    Validate a request body and resolve the entity it names

    Accepts {"entity_type": ..., "entity_id": ...} or the legacy
    {"meeting_id": ...}; a meeting_id, when present, overrides the other two.

    Raises:
        InvalidInput: malformed body, unknown entity_type or unusable entity_id
    """
    if not isinstance(body, dict):
        raise InvalidInput("Request body must be a JSON object")

    entity_type: Union[str, Any] = body.get("entity_type")
    entity_id = body.get("entity_id")

    if body.get("meeting_id") is not None:
        entity_type = "meeting"
        entity_id = body["meeting_id"]

    if entity_type is None:
        raise InvalidInput("Invalid entity_type or entity_id: entity_type is required")

    if not isinstance(entity_type, str) or entity_type not in set(entity_types):
        raise InvalidInput(f"Invalid entity_type or entity_id: unsupported entity_type '{entity_type}'")

    normalized_id = normalize_entity_id(entity_id)
    if normalized_id is None:
        raise InvalidInput("Invalid entity_type or entity_id: entity_id must be a non-empty string or number")

    return EntityReference(entity_type=entity_type, entity_id=normalized_id)
