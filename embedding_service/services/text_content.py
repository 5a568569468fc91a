"""
Reduction of structured entity content to plain text for embedding.

Decoded JSON is first lifted into a small closed set of content variants
(null, scalar, sequence, keyed) and then folded into a single string. The
fold is total: every variant has exactly one rendering.
"""
import math
from dataclasses import dataclass
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class NullContent:
    pass


@dataclass(frozen=True)
class ScalarContent:
    value: Union[str, int, float, bool]


@dataclass(frozen=True)
class SequenceContent:
    items: Tuple["Content", ...]


@dataclass(frozen=True)
class KeyedContent:
    values: Tuple["Content", ...]


Content = Union[NullContent, ScalarContent, SequenceContent, KeyedContent]

NULL = NullContent()


def to_content(raw: Any) -> Content:
    """Lift a decoded JSON value into the content variant"""
    if raw is None:
        return NULL
    if isinstance(raw, (str, bool, int, float)):
        return ScalarContent(raw)
    if isinstance(raw, (list, tuple)):
        return SequenceContent(tuple(to_content(item) for item in raw))
    if isinstance(raw, dict):
        return KeyedContent(tuple(to_content(value) for value in raw.values()))
    # Anything else the store hands back is treated as its string form
    return ScalarContent(str(raw))


def render_scalar(value: Union[str, int, float, bool]) -> str:
    """Render a scalar the way it reads in JSON text"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def flatten(content: Content) -> str:
    """
    Fold content into one string

    Null renders as "", scalars as their text, sequences and keyed values
    as the space-joined flattening of their elements.
    """
    if isinstance(content, NullContent):
        return ""
    if isinstance(content, ScalarContent):
        return render_scalar(content.value)
    if isinstance(content, SequenceContent):
        return " ".join(flatten(item) for item in content.items)
    if isinstance(content, KeyedContent):
        return " ".join(flatten(value) for value in content.values)
    raise TypeError(f"Unknown content variant: {type(content).__name__}")


def flatten_value(raw: Any) -> str:
    return flatten(to_content(raw))


def bound_text(text: str, max_length: int) -> Tuple[str, bool]:
    """
    Truncate text to at most max_length characters

    Returns:
        (bounded_text, was_truncated)
    """
    if len(text) > max_length:
        return text[:max_length], True
    return text, False
