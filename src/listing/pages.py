"""Page layouts built from listing sections.

A page is an ordered list of sections, each one a single content query
rendered by the lister.  A fatal error in one section (store unavailable,
invalid query) leaves that section empty; the rest of the page renders.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from showcase.content.models import ContentFilter, ContentQuery, ContentType, SortOrder
from showcase.errors import InvalidQueryError, StoreUnavailableError
from showcase.listing.lister import ContentLister
from showcase.listing.views import EVENT_DETAIL_VIEW, Fragment, ViewSpec

logger = logging.getLogger(__name__)

ABOUT_PAGE_ID = 4
FEATURED_EVENTS_CATEGORY = 5
OTHER_EVENTS_CATEGORY = 6
LEADERSHIP_CATEGORY = "capo"


@dataclass(frozen=True)
class Section:
    """One named listing on a page."""

    name: str
    query: ContentQuery
    view: ViewSpec | None = None


@dataclass(frozen=True)
class PageLayout:
    name: str
    sections: tuple[Section, ...]


@dataclass
class SectionResult:
    name: str
    fragments: list[Fragment] = field(default_factory=list)
    error: str | None = None

    @property
    def html(self) -> str:
        if not self.fragments:
            return ""
        body = "\n".join(self.fragments)
        return f'<section id="{self.name}">\n{body}\n</section>'


@dataclass
class PageBody:
    name: str
    sections: list[SectionResult] = field(default_factory=list)

    @property
    def html(self) -> str:
        return "\n".join(s.html for s in self.sections if s.html)

    @property
    def failed_sections(self) -> list[str]:
        return [s.name for s in self.sections if s.error is not None]

    def section(self, name: str) -> SectionResult:
        for result in self.sections:
            if result.name == name:
                return result
        raise KeyError(name)


def render_section(lister: ContentLister, section: Section) -> SectionResult:
    """Render one section, isolating fatal listing errors."""
    try:
        fragments = lister.render(section.query, section.view)
    except (StoreUnavailableError, InvalidQueryError) as exc:
        logger.warning("Section %r rendered empty: %s", section.name, exc)
        return SectionResult(section.name, error=str(exc))
    return SectionResult(section.name, fragments)


def render_page(lister: ContentLister, layout: PageLayout) -> PageBody:
    """Render every section of ``layout`` in order."""
    return PageBody(layout.name, [render_section(lister, s) for s in layout.sections])


# ── Built-in layouts ─────────────────────────────────────────────


def home_layout() -> PageLayout:
    return PageLayout(
        "home",
        (
            Section("sliders", ContentQuery(content_type=ContentType.SLIDE, limit=5)),
            Section(
                "about-us",
                ContentQuery(
                    content_type=ContentType.PAGE,
                    filter=ContentFilter(item_id=ABOUT_PAGE_ID),
                    limit=1,
                ),
            ),
            Section(
                "featured-events",
                ContentQuery(
                    content_type=ContentType.EVENT,
                    filter=ContentFilter(category_id=FEATURED_EVENTS_CATEGORY),
                    limit=2,
                ),
            ),
            Section(
                "events",
                ContentQuery(
                    content_type=ContentType.EVENT,
                    filter=ContentFilter(category_id=OTHER_EVENTS_CATEGORY),
                    limit=3,
                ),
            ),
            Section(
                "leadership",
                ContentQuery(
                    content_type=ContentType.EMPLOYEE,
                    filter=ContentFilter(category_name=LEADERSHIP_CATEGORY),
                    limit=3,
                ),
            ),
        ),
    )


def events_layout() -> PageLayout:
    return PageLayout(
        "events",
        (Section("events", ContentQuery(content_type=ContentType.EVENT, limit=9)),),
    )


def about_layout(page_id: int = ABOUT_PAGE_ID) -> PageLayout:
    """The about page body followed by the team, oldest hire first."""
    return PageLayout(
        "about",
        (
            Section(
                "page",
                ContentQuery(
                    content_type=ContentType.PAGE,
                    filter=ContentFilter(item_id=page_id),
                    limit=1,
                ),
            ),
            Section(
                "team",
                ContentQuery(
                    content_type=ContentType.EMPLOYEE,
                    sort_order=SortOrder.ASCENDING,
                    limit=6,
                ),
            ),
        ),
    )


def single_event_layout(item_id: int) -> PageLayout:
    return PageLayout(
        "single-event",
        (
            Section(
                "event",
                ContentQuery(
                    content_type=ContentType.EVENT,
                    filter=ContentFilter(item_id=item_id),
                    limit=1,
                ),
                view=EVENT_DETAIL_VIEW,
            ),
        ),
    )


# Layouts that take no arguments, by name.
LAYOUTS: dict[str, Callable[[], PageLayout]] = {
    "home": home_layout,
    "events": events_layout,
    "about": about_layout,
}
