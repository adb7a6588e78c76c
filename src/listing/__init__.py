"""Listing domain: the content lister, its views and page layouts."""

from showcase.listing.lister import DEFAULT_GATES, ContentLister
from showcase.listing.pages import (
    PageBody,
    PageLayout,
    Section,
    SectionResult,
    render_page,
    render_section,
)
from showcase.listing.views import DEFAULT_VIEWS, Fragment, ViewSpec

__all__ = [
    "DEFAULT_GATES",
    "DEFAULT_VIEWS",
    "ContentLister",
    "Fragment",
    "PageBody",
    "PageLayout",
    "Section",
    "SectionResult",
    "ViewSpec",
    "render_page",
    "render_section",
]
