"""
Routedoc — Handler Replies
============================

What:  The value a route handler hands back to the dispatcher.
How:   Handlers may return a Reply directly or any structured value;
       `to_reply()` normalizes it. Rendering to bytes is left to the HTTP layer
       (see routedoc.main.render_reply).

Normalization:
    Reply                  → unchanged
    str                    → text/plain, 200
    BaseModel, dict, list  → application/json, 200 (pydantic aliases applied)
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from pydantic import TypeAdapter

JSON = "application/json"
TEXT = "text/plain"

_ENCODER = TypeAdapter(Any)


@dataclass(frozen=True)
class Reply:
    body: Any
    status_code: int = 200
    media_type: str = JSON
    headers: Tuple[Tuple[str, str], ...] = ()


def json(value: Any, status_code: int = 200, headers: Optional[Mapping[str, str]] = None) -> Reply:
    """JSON reply; pydantic models are dumped by alias."""
    return Reply(
        body=_ENCODER.dump_python(value, mode="json", by_alias=True),
        status_code=status_code,
        media_type=JSON,
        headers=tuple((headers or {}).items()),
    )


def text(value: str, status_code: int = 200, headers: Optional[Mapping[str, str]] = None) -> Reply:
    return Reply(
        body=value,
        status_code=status_code,
        media_type=TEXT,
        headers=tuple((headers or {}).items()),
    )


def to_reply(value: Any) -> Reply:
    if isinstance(value, Reply):
        return value
    if isinstance(value, str):
        return text(value)
    return json(value)
