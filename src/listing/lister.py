"""The content lister: one bounded query, one view per item.

Every listing on the site is the same loop: fetch at most N items of a
type matching a filter, resolve the fields the type's view needs, skip
items whose gate fields are empty, and render the rest.  ``ContentLister``
owns that loop so pages only describe *what* to list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from showcase.content.models import (
    EMPTY,
    ContentItem,
    ContentQuery,
    ContentType,
    FieldValue,
    ListResult,
    is_empty,
)
from showcase.content.store import ContentStore
from showcase.errors import FieldResolutionError
from showcase.listing.views import DEFAULT_VIEWS, Fragment, ViewSpec

logger = logging.getLogger(__name__)

# Alias to avoid shadowing by ContentLister.list method
_list = list

# An item of these types is skipped when any listed field is empty.
DEFAULT_GATES: dict[ContentType, tuple[str, ...]] = {
    ContentType.SLIDE: ("image",),
    ContentType.EMPLOYEE: ("photo",),
}


class ContentLister:
    """Lists content from a store and renders it through per-type views.

    Stateless between calls: nothing about a query or its result is kept
    once ``list`` or ``render`` returns.  There is no offset or cursor;
    each call is a fresh top-N fetch.
    """

    def __init__(
        self,
        store: ContentStore,
        views: Mapping[ContentType, ViewSpec] | None = None,
        gates: Mapping[ContentType, Iterable[str]] | None = None,
    ) -> None:
        self._store = store
        self._views = dict(DEFAULT_VIEWS if views is None else views)
        source = DEFAULT_GATES if gates is None else gates
        self._gates = {ContentType(k): tuple(v) for k, v in source.items()}

    @property
    def store(self) -> ContentStore:
        return self._store

    def gate_fields(self, content_type: ContentType) -> tuple[str, ...]:
        return self._gates.get(content_type, ())

    def view_for(self, content_type: ContentType) -> ViewSpec:
        try:
            return self._views[content_type]
        except KeyError:
            raise LookupError(f"No view registered for {content_type}") from None

    # ── Listing ──────────────────────────────────────────────────

    def list(self, query: ContentQuery) -> ListResult:
        """Return at most ``query.limit`` matching items in query order.

        An empty match set, including a filter on an unknown category or
        id, is an empty result.  StoreUnavailableError and
        InvalidQueryError from the store propagate.
        """
        items = self._store.query(
            query.content_type, query.filter, query.sort_order, query.limit
        )
        if len(items) > query.limit:
            logger.debug(
                "Store returned %d items for limit %d; truncating", len(items), query.limit
            )
        return ListResult(query=query, items=_list(items[: query.limit]))

    # ── Rendering ────────────────────────────────────────────────

    def resolve_fields(self, item: ContentItem, names: Iterable[str]) -> dict[str, FieldValue]:
        """Resolve each named field, recording misses as EMPTY."""
        fields: dict[str, FieldValue] = {}
        for name in names:
            if name in fields:
                continue
            try:
                fields[name] = self._store.resolve_field(item, name)
            except FieldResolutionError as exc:
                logger.debug("%s", exc)
                fields[name] = EMPTY
        return fields

    def passes_gate(self, item: ContentItem, fields: Mapping[str, FieldValue]) -> bool:
        return not any(is_empty(fields.get(name)) for name in self.gate_fields(item.content_type))

    def render_item(self, item: ContentItem, view: ViewSpec | None = None) -> Fragment | None:
        """Render one item, or return None if it is gated out or renders blank.

        The view receives the item with its permalink and featured image
        as the store resolves them.
        """
        view = view or self.view_for(item.content_type)
        fields = self.resolve_fields(item, (*view.fields, *self.gate_fields(item.content_type)))
        if not self.passes_gate(item, fields):
            logger.debug("Skipping %s %d: gate field empty", item.content_type, item.id)
            return None
        fragment = view.render(self._resolved(item), fields)
        if not fragment or not fragment.strip():
            logger.debug("Skipping %s %d: view rendered nothing", item.content_type, item.id)
            return None
        return fragment

    def _resolved(self, item: ContentItem) -> ContentItem:
        update: dict[str, object] = {}
        if not item.permalink:
            update["permalink"] = self._store.permalink(item)
        if item.featured_image is not None and not self._store.has_featured_image(item):
            update["featured_image"] = None
        return item.model_copy(update=update) if update else item

    def render(self, query: ContentQuery, view: ViewSpec | None = None) -> _list[Fragment]:
        """List ``query`` and render every item that passes its gate."""
        result = self.list(query)
        fragments: _list[Fragment] = []
        for item in result.items:
            fragment = self.render_item(item, view)
            if fragment is not None:
                fragments.append(fragment)
        return fragments
