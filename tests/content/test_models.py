"""Tests for content domain models."""

from datetime import UTC, datetime

import pytest
from pydantic import TypeAdapter, ValidationError

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
from showcase.errors import InvalidQueryError


class TestContentType:
    def test_all_values(self):
        values = {t.value for t in ContentType}
        assert values == {"event", "employee", "slide", "page", "post"}


class TestSortOrder:
    def test_enum_values(self):
        assert SortOrder.DEFAULT == "default"
        assert SortOrder.ASCENDING == "ascending"


class TestFieldValue:
    def test_discriminated_parsing(self):
        adapter = TypeAdapter(FieldValue)
        assert adapter.validate_python({"kind": "text", "text": "hi"}) == TextValue(text="hi")
        image = adapter.validate_python(
            {"kind": "image", "url": "/a.jpg", "width": 900, "height": 600}
        )
        assert isinstance(image, ImageRef)
        assert image.width == 900
        assert isinstance(adapter.validate_python({"kind": "empty"}), EmptyValue)

    def test_is_empty(self):
        assert is_empty(None)
        assert is_empty(EMPTY)
        assert is_empty(TextValue(text="   "))
        assert is_empty(ImageRef(url=""))
        assert not is_empty(TextValue(text="ACME"))
        assert not is_empty(ImageRef(url="/slide.jpg"))


class TestContentItem:
    def test_defaults(self):
        item = ContentItem(
            id=1,
            content_type=ContentType.EVENT,
            title="Launch",
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )
        assert item.body == ""
        assert item.categories == []
        assert item.custom_fields == {}
        assert item.has_featured_image is False

    def test_featured_image_and_categories(self):
        item = ContentItem(
            id=2,
            content_type=ContentType.EVENT,
            title="Gala",
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
            categories=[Category(id=5, slug="top"), Category(id=6, slug="other")],
            featured_image=ImageRef(url="/gala.jpg"),
        )
        assert item.has_featured_image is True
        assert item.category_ids == {5, 6}

    def test_frozen(self):
        item = ContentItem(
            id=3,
            content_type=ContentType.PAGE,
            title="About",
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )
        with pytest.raises(ValidationError):
            item.title = "Changed"  # type: ignore[misc]


class TestContentFilter:
    def test_empty_filter(self):
        assert ContentFilter().is_empty
        assert ContentFilter().used_fields() == set()

    def test_used_fields(self):
        f = ContentFilter(category_id=5, exclude_category_ids=frozenset({6}))
        assert f.used_fields() == {"category_id", "exclude_category_ids"}


class TestContentQuery:
    def test_defaults(self):
        query = ContentQuery(content_type=ContentType.EVENT, limit=2)
        assert query.sort_order == SortOrder.DEFAULT
        assert query.filter.is_empty

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_rejected(self, limit: int):
        with pytest.raises(InvalidQueryError, match="limit"):
            ContentQuery(content_type=ContentType.EVENT, limit=limit)

    def test_invalid_query_not_wrapped_by_pydantic(self):
        with pytest.raises(Exception) as exc_info:
            ContentQuery(
                content_type=ContentType.SLIDE, filter=ContentFilter(category_id=5), limit=5
            )
        assert type(exc_info.value) is InvalidQueryError
        assert not isinstance(exc_info.value, (ValidationError, ValueError))

    def test_category_filter_rejected_for_slides(self):
        with pytest.raises(InvalidQueryError, match="category_id"):
            ContentQuery(
                content_type=ContentType.SLIDE,
                filter=ContentFilter(category_id=5),
                limit=5,
            )

    def test_category_filter_rejected_for_pages(self):
        with pytest.raises(InvalidQueryError, match="category_name"):
            ContentQuery(
                content_type=ContentType.PAGE,
                filter=ContentFilter(category_name="capo"),
                limit=1,
            )

    def test_item_id_allowed_for_every_type(self):
        for content_type in ContentType:
            query = ContentQuery(
                content_type=content_type, filter=ContentFilter(item_id=4), limit=1
            )
            assert query.filter.item_id == 4

    def test_category_filters_allowed_for_events(self):
        query = ContentQuery(
            content_type=ContentType.EVENT,
            filter=ContentFilter(
                category_id=5, category_name="top", exclude_category_ids=frozenset({7})
            ),
            limit=3,
        )
        assert query.limit == 3


class TestListResult:
    def test_empty(self):
        result = ListResult(query=ContentQuery(content_type=ContentType.POST, limit=1))
        assert result.is_empty
        assert len(result) == 0
        assert result.ids == []

    def test_indexing(self):
        item = ContentItem(
            id=9,
            content_type=ContentType.POST,
            title="Hello",
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )
        result = ListResult(
            query=ContentQuery(content_type=ContentType.POST, limit=1), items=[item]
        )
        assert len(result) == 1
        assert result[0].id == 9
        assert not result.is_empty
