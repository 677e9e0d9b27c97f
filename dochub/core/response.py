"""Standardized JSON response envelopes.

Single items:  `{ "data": {...} }`
Lists:         `{ "data": [...], "meta": {"total", "page", "limit", "pages"} }`
Errors are shaped by dochub.core.exceptions: `{ "error": {"code", "message"} }`.
"""


from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from dochub.core.pagination import PageMeta

T = TypeVar("T")

_ENVELOPE_CONFIG = {
    "populate_by_name": True,
    "alias_generator": to_camel,
}


class DataResponse(BaseModel, Generic[T]):
    data: T

    model_config = _ENVELOPE_CONFIG


class ListResponse(BaseModel, Generic[T]):
    data: list[T]
    meta: PageMeta

    model_config = _ENVELOPE_CONFIG


def paginated(items: list, total: int, page: int, limit: int) -> dict:
    """Build a paginated response dict for use with ListResponse."""
    return {"data": items, "meta": PageMeta.build(total, page, limit)}
