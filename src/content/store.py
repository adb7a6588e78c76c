"""Content stores: the query engine the lister reads from.

``ContentStore`` is the interface the lister consumes.  Two
implementations are provided: an in-memory store that owns the filtering,
ordering and limiting rules, and a JSON-backed store that loads its items
from a single file and delegates to the in-memory rules.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from showcase.content.models import (
    Category,
    ContentFilter,
    ContentItem,
    ContentType,
    FieldValue,
    SortOrder,
)
from showcase.errors import FieldResolutionMiss, StoreUnavailableError

logger = logging.getLogger(__name__)

STORE_FILENAME = "content.json"

# URL prefixes the site uses for each content type.
PERMALINK_BASES: dict[ContentType, str] = {
    ContentType.EVENT: "eventi",
    ContentType.EMPLOYEE: "dipendenti",
    ContentType.SLIDE: "sliders",
    ContentType.PAGE: "",
    ContentType.POST: "blog",
}


class ContentStore(ABC):
    """Read-side interface of the host content store."""

    @abstractmethod
    def query(
        self,
        content_type: ContentType,
        content_filter: ContentFilter,
        sort_order: SortOrder,
        limit: int,
    ) -> list[ContentItem]:
        """Return at most ``limit`` items of ``content_type`` matching the filter."""

    @abstractmethod
    def resolve_field(self, item: ContentItem, field_name: str) -> FieldValue:
        """Return the value of a custom field.

        Raises FieldResolutionMiss if the item has no such field.
        """

    @abstractmethod
    def get(self, item_id: int) -> ContentItem | None:
        """Return a single item by id, or None if not found."""

    def has_featured_image(self, item: ContentItem) -> bool:
        return item.has_featured_image

    def permalink(self, item: ContentItem) -> str:
        """Return the item's URL, deriving one from its type and slug if unset."""
        if item.permalink:
            return item.permalink
        slug = item.slug or str(item.id)
        base = PERMALINK_BASES[item.content_type]
        return f"/{base}/{slug}/" if base else f"/{slug}/"


class MemoryContentStore(ContentStore):
    """Content store over an in-memory list of items."""

    def __init__(
        self,
        items: list[ContentItem] | None = None,
        categories: list[Category] | None = None,
    ) -> None:
        self._items = list(items or [])
        self._categories: dict[str, Category] = {}
        for category in categories or []:
            self._categories[category.slug] = category
        # Categories attached to items are known even if not declared.
        for item in self._items:
            for category in item.categories:
                self._categories.setdefault(category.slug, category)

    @property
    def items(self) -> list[ContentItem]:
        return list(self._items)

    def category_by_slug(self, slug: str) -> Category | None:
        return self._categories.get(slug)

    def query(
        self,
        content_type: ContentType,
        content_filter: ContentFilter,
        sort_order: SortOrder,
        limit: int,
    ) -> list[ContentItem]:
        matches = [
            item
            for item in self._items
            if item.content_type == content_type and self._matches(item, content_filter)
        ]
        matches.sort(
            key=lambda item: (item.created_at, item.id),
            reverse=sort_order == SortOrder.DEFAULT,
        )
        return matches[:limit]

    def resolve_field(self, item: ContentItem, field_name: str) -> FieldValue:
        try:
            return item.custom_fields[field_name]
        except KeyError:
            raise FieldResolutionMiss(item.id, field_name) from None

    def get(self, item_id: int) -> ContentItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def _matches(self, item: ContentItem, content_filter: ContentFilter) -> bool:
        if content_filter.item_id is not None and item.id != content_filter.item_id:
            return False
        ids = item.category_ids
        if content_filter.category_id is not None and content_filter.category_id not in ids:
            return False
        if content_filter.category_name is not None:
            category = self._categories.get(content_filter.category_name)
            # Unknown slugs match nothing rather than being ignored.
            if category is None or category.id not in ids:
                return False
        if ids & content_filter.exclude_category_ids:
            return False
        return True


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    categories: list[Category] = Field(default_factory=list)
    items: list[ContentItem] = Field(default_factory=list)


class JsonContentStore(ContentStore):
    """Content store backed by a single JSON file.

    The file is read on first use.  A missing or corrupt file makes the
    store unavailable; it is never replaced by an empty store.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._memory: MemoryContentStore | None = None

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> MemoryContentStore:
        if self._memory is not None:
            return self._memory
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise StoreUnavailableError(f"Content store not found: {self._path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreUnavailableError(f"Cannot read content store {self._path}: {exc}") from exc
        try:
            data = _StoreData.model_validate(raw)
        except ValidationError as exc:
            raise StoreUnavailableError(f"Corrupt content store at {self._path}") from exc
        logger.info("Loaded %d items from %s", len(data.items), self._path)
        self._memory = MemoryContentStore(data.items, data.categories)
        return self._memory

    # ── Read operations ──────────────────────────────────────────

    def query(
        self,
        content_type: ContentType,
        content_filter: ContentFilter,
        sort_order: SortOrder,
        limit: int,
    ) -> list[ContentItem]:
        return self._load().query(content_type, content_filter, sort_order, limit)

    def resolve_field(self, item: ContentItem, field_name: str) -> FieldValue:
        return self._load().resolve_field(item, field_name)

    def get(self, item_id: int) -> ContentItem | None:
        return self._load().get(item_id)


def open_store(path: Path) -> JsonContentStore:
    """Open a JSON store at ``path``, or ``path / STORE_FILENAME`` for a directory."""
    if path.is_dir():
        path = path / STORE_FILENAME
    return JsonContentStore(path)
