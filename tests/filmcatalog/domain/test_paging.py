from dataclasses import dataclass

import pytest
from protean.exceptions import ValidationError

from filmcatalog.shared.paging import Page, PageRequest, order_items


@dataclass
class Row:
    key: str
    score: int


class TestPageRequest:
    def test_offset(self):
        assert PageRequest(index=2, size=10).offset == 20

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            PageRequest(index=-1)

    @pytest.mark.parametrize("size", [0, 101])
    def test_size_bounds(self, size):
        with pytest.raises(ValidationError):
            PageRequest(size=size)


class TestPage:
    def test_slice_reports_totals(self):
        page = Page.slice(range(25), PageRequest(index=1, size=10))
        assert page.items == list(range(10, 20))
        assert page.total_elements == 25
        assert page.total_pages == 3
        assert page.is_last is False

    def test_last_page(self):
        page = Page.slice(range(25), PageRequest(index=2, size=10))
        assert page.items == list(range(20, 25))
        assert page.is_last is True

    def test_empty(self):
        page = Page.slice([], PageRequest())
        assert page.total_pages == 0
        assert page.is_last is True


class TestOrderItems:
    def test_descending_with_identity_tie_break(self):
        rows = [Row("c", 1), Row("b", 2), Row("a", 1), Row("d", 2)]
        ordered = order_items(rows, "-score", {"score"}, "score", "key")
        assert [r.key for r in ordered] == ["b", "d", "a", "c"]

    def test_default_sort_applies(self):
        rows = [Row("b", 2), Row("a", 1)]
        ordered = order_items(rows, None, {"score"}, "score", "key")
        assert [r.key for r in ordered] == ["a", "b"]

    def test_unknown_sort_key_rejected(self):
        with pytest.raises(ValidationError) as exc:
            order_items([], "password", {"score"}, "score", "key")
        assert "sort" in exc.value.messages
