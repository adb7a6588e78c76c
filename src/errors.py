"""Error taxonomy for content listing.

``StoreUnavailableError`` and ``InvalidQueryError`` are fatal to a render
pass and propagate to the caller.  ``FieldResolutionMiss`` is recovered
locally by the lister as an empty field value.
"""


class ShowcaseError(Exception):
    """Base class for all showcase errors."""


class StoreUnavailableError(ShowcaseError):
    """The content store could not be reached or read."""


class InvalidQueryError(ShowcaseError):
    """A content query is malformed or uses filters its type does not support."""


class FieldResolutionError(ShowcaseError):
    """A custom field could not be resolved for an item."""

    def __init__(self, item_id: int, field_name: str, reason: str = "") -> None:
        self.item_id = item_id
        self.field_name = field_name
        message = f"Cannot resolve field {field_name!r} on item {item_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class FieldResolutionMiss(FieldResolutionError):
    """The item has no value for the requested field."""
