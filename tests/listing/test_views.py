"""Tests for per-content-type view renderers."""

from datetime import UTC, datetime

from showcase.content.models import (
    EMPTY,
    ContentItem,
    ContentType,
    ImageRef,
    TextValue,
)
from showcase.listing.views import (
    DEFAULT_VIEWS,
    EVENT_DETAIL_VIEW,
    external_url,
    image_of,
    render_employee,
    render_event_card,
    render_event_detail,
    render_page_item,
    render_post,
    render_slide,
    text_of,
)


def _make_item(content_type: ContentType = ContentType.EVENT, **kwargs: object) -> ContentItem:
    defaults: dict[str, object] = {
        "id": 1,
        "content_type": content_type,
        "title": "Summer Gala",
        "permalink": "/eventi/summer-gala/",
        "created_at": datetime(2024, 6, 1, tzinfo=UTC),
    }
    defaults.update(kwargs)
    return ContentItem(**defaults)  # type: ignore[arg-type]


class TestHelpers:
    def test_text_of(self):
        assert text_of(TextValue(text="ACME")) == "ACME"
        assert text_of(TextValue(text="  ")) == ""
        assert text_of(EMPTY) == ""
        assert text_of(ImageRef(url="/x.jpg")) == ""
        assert text_of(None) == ""

    def test_image_of(self):
        assert image_of(ImageRef(url="/x.jpg")) == ImageRef(url="/x.jpg")
        assert image_of(ImageRef(url="")) is None
        assert image_of(TextValue(text="/x.jpg")) is None

    def test_external_url(self):
        assert external_url("www.example.com") == "http://www.example.com"
        assert external_url("https://example.com") == "https://example.com"
        assert external_url("/eventi/") == "/eventi/"


class TestSlide:
    def test_full_slide(self):
        html = render_slide(
            _make_item(ContentType.SLIDE),
            {
                "image": ImageRef(url="/hero.jpg"),
                "caption": TextValue(text="Welcome"),
                "link": TextValue(text="www.example.com"),
            },
        )
        assert '<a href="http://www.example.com">' in html
        assert 'src="/hero.jpg"' in html
        assert "<h1>Welcome</h1>" in html

    def test_no_link_no_caption(self):
        html = render_slide(
            _make_item(ContentType.SLIDE),
            {"image": ImageRef(url="/hero.jpg"), "caption": EMPTY, "link": EMPTY},
        )
        assert "<a " not in html
        assert "orbit-caption" not in html
        assert 'src="/hero.jpg"' in html

    def test_no_image_renders_nothing(self):
        assert render_slide(_make_item(ContentType.SLIDE), {"image": EMPTY}) == ""


class TestEvent:
    def test_card_with_image_and_client(self):
        item = _make_item(featured_image=ImageRef(url="/gala.jpg", width=900, height=600))
        html = render_event_card(item, {"client": TextValue(text="ACME")})
        assert '<a href="/eventi/summer-gala/">' in html
        assert 'width="900" height="600"' in html
        assert "<h3>Summer Gala</h3>" in html
        assert "<h4>ACME</h4>" in html

    def test_card_without_image_or_client(self):
        html = render_event_card(_make_item(), {"client": EMPTY})
        assert "<img" not in html
        assert "<h4>" not in html
        assert "<h3>Summer Gala</h3>" in html

    def test_title_is_escaped(self):
        html = render_event_card(_make_item(title="Rock & <Roll>"), {})
        assert "Rock &amp; &lt;Roll&gt;" in html

    def test_detail(self):
        item = _make_item(body='<img src="/g1.jpg">')
        html = render_event_detail(
            item,
            {"description": TextValue(text="A night out."), "client": TextValue(text="ACME")},
        )
        assert "<p>A night out.</p>" in html
        assert "Client: <span>ACME</span>" in html
        assert '<img src="/g1.jpg">' in html

    def test_detail_without_optional_parts(self):
        html = render_event_detail(_make_item(), {"description": EMPTY, "client": EMPTY})
        assert "Client" not in html
        assert "Gallery" not in html
        assert "<h3>Summer Gala</h3>" in html

    def test_detail_view_fields(self):
        assert set(EVENT_DETAIL_VIEW.fields) == {"client", "description"}


class TestEmployee:
    def test_full_employee(self):
        html = render_employee(
            _make_item(ContentType.EMPLOYEE, title="Anna"),
            {
                "photo": ImageRef(url="/anna.jpg"),
                "email": TextValue(text="anna@example.com"),
                "role": TextValue(text="Director"),
            },
        )
        assert 'src="/anna.jpg"' in html
        assert html.count("mailto:anna@example.com") == 2
        assert '<p class="role">Director</p>' in html

    def test_without_email(self):
        html = render_employee(
            _make_item(ContentType.EMPLOYEE, title="Anna"),
            {"photo": ImageRef(url="/anna.jpg"), "email": EMPTY, "role": EMPTY},
        )
        assert "mailto:" not in html
        assert "<h4>Anna</h4>" in html


class TestPageAndPost:
    def test_page(self):
        page = _make_item(ContentType.PAGE, title="About us", body="<p>Hi</p>")
        html = render_page_item(page, {})
        assert "<h3>About us</h3>" in html
        assert "<p>Hi</p>" in html

    def test_post(self):
        html = render_post(_make_item(ContentType.POST, permalink="/blog/hello/"), {})
        assert '<a href="/blog/hello/">' in html


class TestDefaultViews:
    def test_every_type_has_a_view(self):
        assert set(DEFAULT_VIEWS) == set(ContentType)

    def test_slide_view_fields(self):
        assert DEFAULT_VIEWS[ContentType.SLIDE].fields == ("image", "caption", "link")
