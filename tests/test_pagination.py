import pytest

from newsdesk.core.pagination import page_offset, total_pages


@pytest.mark.parametrize(
    "total_rows, limit, expected",
    [
        (25, 10, 3),
        (20, 10, 2),
        (1, 10, 1),
        (0, 10, 0),
        (7, 6, 2),
        (9_000_000_000_000_000_001, 1_000_000_000, 9_000_000_001),
    ],
)
def test_total_pages(total_rows, limit, expected):
    assert total_pages(total_rows, limit) == expected


def test_page_offset():
    assert page_offset(1, 10) == 0
    assert page_offset(2, 10) == 10
    assert page_offset(3, 6) == 12


@pytest.mark.parametrize("limit", [0, -1])
def test_non_positive_limit_is_a_programming_error(limit):
    with pytest.raises(ValueError):
        total_pages(10, limit)
    with pytest.raises(ValueError):
        page_offset(1, limit)


def test_page_below_one_is_a_programming_error():
    with pytest.raises(ValueError):
        page_offset(0, 10)
