"""Per-content-type view renderers.

Each view declares the custom fields it needs and a render function that
receives the item and those resolved fields explicitly.  Fields that did
not resolve arrive as ``EmptyValue`` and the fragment they would feed is
left out.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from html import escape

from showcase.content.models import (
    ContentItem,
    ContentType,
    FieldValue,
    ImageRef,
    TextValue,
    is_empty,
)

Fragment = str
RenderFn = Callable[[ContentItem, Mapping[str, FieldValue]], Fragment]


@dataclass(frozen=True)
class ViewSpec:
    """A render function and the field names it reads."""

    render: RenderFn
    fields: tuple[str, ...] = ()


def text_of(value: FieldValue | None) -> str:
    """Return the text of a field, or "" when it is empty or not text."""
    if isinstance(value, TextValue) and not is_empty(value):
        return value.text
    return ""


def image_of(value: FieldValue | None) -> ImageRef | None:
    if isinstance(value, ImageRef) and not is_empty(value):
        return value
    return None


def external_url(value: str) -> str:
    """Prefix bare host names with http:// the way editors enter them."""
    value = value.strip()
    if "://" in value or value.startswith(("/", "mailto:")):
        return value
    return f"http://{value}"


def _img(image: ImageRef, css_class: str = "") -> str:
    attrs = [f'src="{escape(image.url)}"']
    if image.width and image.height:
        attrs.append(f'width="{image.width}" height="{image.height}"')
    if css_class:
        attrs.insert(0, f'class="{css_class}"')
    return f"<img {' '.join(attrs)}>"


def _featured(item: ContentItem, css_class: str = "") -> str:
    # The lister clears featured_image when the store reports none.
    if item.featured_image is None or not item.has_featured_image:
        return ""
    return _img(item.featured_image, css_class)


# ── Views ────────────────────────────────────────────────────────


def render_slide(item: ContentItem, fields: Mapping[str, FieldValue]) -> Fragment:
    image = image_of(fields.get("image"))
    # The lister gates slides on their image; render nothing if called without one.
    if image is None:
        return ""
    img = _img(image, "orbit-image")
    link = text_of(fields.get("link"))
    if link:
        img = f'<a href="{escape(external_url(link))}">{img}</a>'
    lines = ['<li class="orbit-slide">', img]
    caption = text_of(fields.get("caption"))
    if caption:
        lines.append(f'<div class="orbit-caption"><h1>{escape(caption)}</h1></div>')
    lines.append("</li>")
    return "\n".join(lines)


def render_event_card(item: ContentItem, fields: Mapping[str, FieldValue]) -> Fragment:
    lines = ['<div class="event">', f'<a href="{escape(item.permalink)}">', "<figure>"]
    featured = _featured(item)
    if featured:
        lines.append(featured)
    lines.append('<div class="caption">')
    lines.append(f"<h3>{escape(item.title)}</h3>")
    client = text_of(fields.get("client"))
    if client:
        lines.append(f"<h4>{escape(client)}</h4>")
    lines.extend(["</div>", "</figure>", "</a>", "</div>"])
    return "\n".join(lines)


def render_event_detail(item: ContentItem, fields: Mapping[str, FieldValue]) -> Fragment:
    lines = ['<div class="event-detail">', '<div class="column-1">']
    lines.append(f"<h3>{escape(item.title)}</h3>")
    featured = _featured(item)
    if featured:
        lines.append(featured)
    lines.extend(["</div>", '<div class="column-2">'])
    description = text_of(fields.get("description"))
    if description:
        lines.append(f"<p>{escape(description)}</p>")
    client = text_of(fields.get("client"))
    if client:
        lines.append(f"<h4>Client: <span>{escape(client)}</span></h4>")
    lines.append("</div>")
    if item.body:
        # Body is editor-authored HTML (the gallery) and is emitted as-is.
        lines.extend(['<div class="gallery">', "<h3>Gallery:</h3>", item.body, "</div>"])
    lines.append("</div>")
    return "\n".join(lines)


def render_employee(item: ContentItem, fields: Mapping[str, FieldValue]) -> Fragment:
    lines = ['<div class="person">', '<div class="image-wrapper">']
    photo = image_of(fields.get("photo"))
    if photo is not None:
        lines.append(_img(photo))
    email = text_of(fields.get("email"))
    if email:
        lines.append(
            f'<a href="mailto:{escape(email)}" class="sendmail"><i class="fi-mail"></i></a>'
        )
    lines.append("</div>")
    lines.append(f"<h4>{escape(item.title)}</h4>")
    role = text_of(fields.get("role"))
    if role:
        lines.append(f'<p class="role">{escape(role)}</p>')
    if email:
        lines.append(f'<div class="address"><a href="mailto:{escape(email)}">E-mail</a></div>')
    lines.append("</div>")
    return "\n".join(lines)


def render_page_item(item: ContentItem, fields: Mapping[str, FieldValue]) -> Fragment:
    return "\n".join(
        [
            '<div class="page">',
            f"<h3>{escape(item.title)}</h3>",
            f'<div class="text">{item.body}</div>',
            "</div>",
        ]
    )


def render_post(item: ContentItem, fields: Mapping[str, FieldValue]) -> Fragment:
    return "\n".join(
        [
            "<article>",
            f'<h2><a href="{escape(item.permalink)}">{escape(item.title)}</a></h2>',
            f'<div class="entry-content">{item.body}</div>',
            "</article>",
        ]
    )


SLIDE_VIEW = ViewSpec(render_slide, ("image", "caption", "link"))
EVENT_CARD_VIEW = ViewSpec(render_event_card, ("client",))
EVENT_DETAIL_VIEW = ViewSpec(render_event_detail, ("client", "description"))
EMPLOYEE_VIEW = ViewSpec(render_employee, ("photo", "email", "role"))
PAGE_VIEW = ViewSpec(render_page_item)
POST_VIEW = ViewSpec(render_post)

DEFAULT_VIEWS: dict[ContentType, ViewSpec] = {
    ContentType.SLIDE: SLIDE_VIEW,
    ContentType.EVENT: EVENT_CARD_VIEW,
    ContentType.EMPLOYEE: EMPLOYEE_VIEW,
    ContentType.PAGE: PAGE_VIEW,
    ContentType.POST: POST_VIEW,
}
