from __future__ import annotations

import pytest

from pokedex.pipeline.pagination import clamp_page, page_count, paginate

EXPECTED_PAGE_COUNT = 3


def test_twenty_five_records_split_into_three_pages(numbered_records):
    records = numbered_records(25)

    pages = [paginate(records, page, 10) for page in (1, 2, 3)]

    assert [p.page_count for p in pages] == [EXPECTED_PAGE_COUNT] * 3
    assert list(pages[0].window) == records[0:10]
    assert list(pages[1].window) == records[10:20]
    assert list(pages[2].window) == records[20:25]


def test_windows_cover_every_record_exactly_once(numbered_records):
    records = numbered_records(23)
    for page_size in range(1, 30):
        total = page_count(len(records), page_size)
        seen = [r for p in range(1, total + 1) for r in paginate(records, p, page_size).window]
        assert seen == records, page_size


def test_empty_list_has_no_pages():
    page = paginate([], 1, 10)
    assert page.window == ()
    assert page.page_count == 0
    assert page.page == 1


def test_page_past_the_end_clamps_to_last(numbered_records):
    records = numbered_records(25)
    page = paginate(records, 9, 10)
    assert page.page == EXPECTED_PAGE_COUNT
    assert list(page.window) == records[20:]


def test_page_below_one_clamps_to_first(numbered_records):
    records = numbered_records(5)
    page = paginate(records, 0, 10)
    assert page.page == 1
    assert list(page.window) == records


def test_exact_multiple_has_no_trailing_empty_page(numbered_records):
    assert paginate(numbered_records(20), 1, 10).page_count == 2


@pytest.mark.parametrize("size", [0, -1])
def test_non_positive_page_size_is_rejected(size):
    with pytest.raises(ValueError):
        page_count(10, size)


@pytest.mark.parametrize(
    ("page", "pages", "expected"),
    [(1, 0, 1), (5, 0, 1), (3, 2, 2), (-4, 2, 1), (2, 5, 2)],
)
def test_clamp_page(page, pages, expected):
    assert clamp_page(page, pages) == expected
