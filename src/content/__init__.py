"""Content domain — item models, queries and the stores that answer them."""

from showcase.content.models import (
    EMPTY,
    Category,
    ContentFilter,
    ContentItem,
    ContentQuery,
    ContentType,
    EmptyValue,
    FieldValue,
    ImageRef,
    ListResult,
    SortOrder,
    TextValue,
    is_empty,
)
from showcase.content.store import ContentStore, JsonContentStore, MemoryContentStore

__all__ = [
    "EMPTY",
    "Category",
    "ContentFilter",
    "ContentItem",
    "ContentQuery",
    "ContentStore",
    "ContentType",
    "EmptyValue",
    "FieldValue",
    "ImageRef",
    "JsonContentStore",
    "ListResult",
    "MemoryContentStore",
    "SortOrder",
    "TextValue",
    "is_empty",
]
