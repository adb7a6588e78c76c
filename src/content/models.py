"""Content domain models — pure Pydantic v2 data types.

These models describe what the content store hands to the lister: items
of a fixed set of content types, their categories, and the typed values
of their custom fields.  A ContentQuery is built once per listing and
validated on construction so that an illegal filter never reaches the
store.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from showcase.errors import InvalidQueryError


class ContentType(StrEnum):
    """Kinds of content the site lists."""

    EVENT = "event"
    EMPLOYEE = "employee"
    SLIDE = "slide"
    PAGE = "page"
    POST = "post"


class SortOrder(StrEnum):
    """Listing order.  DEFAULT is the store's natural newest-first order."""

    DEFAULT = "default"
    ASCENDING = "ascending"


# ── Field values ─────────────────────────────────────────────────


class TextValue(BaseModel):
    """A plain text custom field."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class ImageRef(BaseModel):
    """An image custom field or featured image."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    url: str
    width: int = 0
    height: int = 0


class EmptyValue(BaseModel):
    """A field with no value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"


FieldValue = Annotated[TextValue | ImageRef | EmptyValue, Field(discriminator="kind")]

EMPTY = EmptyValue()


def is_empty(value: TextValue | ImageRef | EmptyValue | None) -> bool:
    """Return True if a field value should suppress dependent rendering.

    Blank text and images without a URL count as empty, matching how the
    CMS treats an unset field.
    """
    if value is None or isinstance(value, EmptyValue):
        return True
    if isinstance(value, TextValue):
        return not value.text.strip()
    return not value.url


# ── Items ────────────────────────────────────────────────────────


class Category(BaseModel):
    """A category term attached to items."""

    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    name: str = ""


class ContentItem(BaseModel):
    """One retrievable unit of content.

    Owned by the content store; the lister only reads it for the duration
    of one render pass.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    content_type: ContentType
    title: str
    slug: str = ""
    permalink: str = ""
    created_at: datetime
    body: str = ""
    categories: list[Category] = Field(default_factory=list)
    featured_image: ImageRef | None = None
    custom_fields: dict[str, FieldValue] = Field(default_factory=dict)

    @property
    def has_featured_image(self) -> bool:
        return self.featured_image is not None and bool(self.featured_image.url)

    @property
    def category_ids(self) -> set[int]:
        return {c.id for c in self.categories}


# ── Queries ──────────────────────────────────────────────────────

# Events, employees and posts carry the category taxonomy; slides and
# pages can only be addressed by id.
_CATEGORY_FILTERS = frozenset({"category_id", "category_name", "exclude_category_ids", "item_id"})

LEGAL_FILTERS: dict[ContentType, frozenset[str]] = {
    ContentType.EVENT: _CATEGORY_FILTERS,
    ContentType.EMPLOYEE: _CATEGORY_FILTERS,
    ContentType.POST: _CATEGORY_FILTERS,
    ContentType.SLIDE: frozenset({"item_id"}),
    ContentType.PAGE: frozenset({"item_id"}),
}


class ContentFilter(BaseModel):
    """Predicate over items.  All set fields must hold (logical AND)."""

    model_config = ConfigDict(frozen=True)

    category_id: int | None = None
    category_name: str | None = None
    item_id: int | None = None
    exclude_category_ids: frozenset[int] = Field(default_factory=frozenset)

    def used_fields(self) -> set[str]:
        """Names of the filter fields that are actually set."""
        used = {
            name
            for name in ("category_id", "category_name", "item_id")
            if getattr(self, name) is not None
        }
        if self.exclude_category_ids:
            used.add("exclude_category_ids")
        return used

    @property
    def is_empty(self) -> bool:
        return not self.used_fields()


class ContentQuery(BaseModel):
    """A bounded listing request: type, filter, order and limit.

    Raises InvalidQueryError if ``limit`` is not positive or the filter
    uses a field the content type does not support.
    """

    model_config = ConfigDict(frozen=True)

    content_type: ContentType
    filter: ContentFilter = Field(default_factory=ContentFilter)
    sort_order: SortOrder = SortOrder.DEFAULT
    limit: int

    @model_validator(mode="after")
    def _check_invariants(self) -> ContentQuery:
        if self.limit <= 0:
            raise InvalidQueryError(f"limit must be positive, got {self.limit}")
        illegal = self.filter.used_fields() - LEGAL_FILTERS[self.content_type]
        if illegal:
            raise InvalidQueryError(
                f"{self.content_type} does not support filter(s): {', '.join(sorted(illegal))}"
            )
        return self


class ListResult(BaseModel):
    """Ordered items returned for a query.  Possibly empty, never None."""

    query: ContentQuery
    items: list[ContentItem] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> ContentItem:
        return self.items[index]

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def ids(self) -> list[int]:
        return [item.id for item in self.items]
