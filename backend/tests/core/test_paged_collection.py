"""Paged Collection: pagination math, cursor navigation, and mutation resets.

Tests cover:
    - page_count == ceil(n / p); empty collection has 0 pages
    - page_at / element_at bounds (page-relative positions)
    - current_page advances only on a successful read
    - next_page / prev_page pin the cursor to the sentinels
    - set_cursor collapses out-of-range values to -1 or page_count
    - every mutation resets the cursor to 0
    - iteration is restartable and independent of the cursor
"""

import math

import pytest

from user_registry.core.errors import InvalidInputError
from user_registry.core.paged_collection import PagedCollection


@pytest.fixture
def paged():
    """Eight integers [0..7] in pages of three."""
    collection = PagedCollection(3)
    for i in range(8):
        collection.append(i)
    return collection


# ─── Dimensions ──────────────────────────────────────────────────

def test_page_count_is_ceiling_of_size_over_page_size():
    for page_size in (1, 3, 10):
        for n in (1, 2, 3, 4, 9, 10, 11, 30):
            collection = PagedCollection(page_size, range(n))
            assert collection.page_count == math.ceil(n / page_size)


def test_empty_collection_has_zero_pages():
    collection = PagedCollection(3)
    assert collection.page_count == 0
    assert collection.last_page_index == -1
    assert collection.is_empty()
    assert collection.all_elements() == []


def test_empty_collection_page_reads_return_none():
    collection = PagedCollection(3)
    assert collection.first_page() is None
    assert collection.last_page() is None
    assert collection.current_page() is None
    assert collection.next_page() is None
    assert collection.prev_page() is None


def test_page_size_must_be_positive():
    with pytest.raises(InvalidInputError):
        PagedCollection(0)


def test_basic_pagination(paged):
    assert paged.page_count == 3
    assert len(paged) == 8
    assert paged.all_elements() == list(range(8))
    assert paged.page_at(0) == [0, 1, 2]
    assert paged.page_at(2) == [6, 7]


# ─── page_at / element_at ────────────────────────────────────────

def test_page_at_out_of_range_returns_none(paged):
    assert paged.page_at(-1) is None
    assert paged.page_at(3) is None


def test_page_at_moves_cursor(paged):
    paged.page_at(2)
    assert paged.cursor == 2


def test_page_at_is_idempotent(paged):
    assert paged.page_at(1) == paged.page_at(1) == [3, 4, 5]


def test_page_is_a_copy(paged):
    page = paged.page_at(0)
    page.append(99)
    assert paged.page_at(0) == [0, 1, 2]


def test_element_at_position_inside_page(paged):
    assert paged.element_at(1, 2) == 5


def test_element_at_position_past_page_returns_none(paged):
    assert paged.element_at(1, 5) is None
    assert paged.element_at(1, -1) is None


def test_element_at_position_is_relative_to_short_last_page(paged):
    assert paged.element_at(2, 1) == 7
    assert paged.element_at(2, 2) is None


def test_element_at_wrong_page_returns_none(paged):
    assert paged.element_at(5, 1) is None


# ─── Cursor navigation ───────────────────────────────────────────

def test_current_page_advances_after_successful_read(paged):
    assert paged.current_page() == [0, 1, 2]
    assert paged.cursor == 1
    assert paged.current_page() == [3, 4, 5]
    assert paged.current_page() == [6, 7]
    assert paged.cursor == 3


def test_current_page_does_not_advance_past_end(paged):
    paged.set_cursor(3)
    assert paged.current_page() is None
    assert paged.cursor == 3


def test_next_page_exhaustion_keeps_returning_none(paged):
    assert paged.next_page() == [3, 4, 5]
    assert paged.next_page() == [6, 7]
    assert paged.next_page() is None
    assert paged.cursor == 3
    assert paged.next_page() is None
    assert paged.cursor == 3


def test_prev_page_from_zero_pins_cursor_to_minus_one(paged):
    assert paged.cursor == 0
    assert paged.prev_page() is None
    assert paged.cursor == -1
    assert paged.prev_page() is None
    assert paged.cursor == -1


def test_next_page_from_minus_one_returns_first_page(paged):
    paged.prev_page()
    assert paged.next_page() == [0, 1, 2]


def test_set_cursor_collapses_out_of_range_to_sentinels(paged):
    paged.set_cursor(-7)
    assert paged.cursor == -1
    paged.set_cursor(99)
    assert paged.cursor == paged.last_page_index + 1 == 3
    paged.set_cursor(1)
    assert paged.cursor == 1


def test_first_and_last_page(paged):
    assert paged.last_page() == [6, 7]
    assert paged.cursor == 2
    assert paged.first_page() == [0, 1, 2]
    assert paged.cursor == 0


def test_last_page_when_size_is_multiple_of_page_size():
    collection = PagedCollection(3, range(6))
    assert collection.last_page() == [3, 4, 5]


def test_move_pages_around(paged):
    assert paged.current_page() == [0, 1, 2]
    assert paged.current_page() == [3, 4, 5]
    paged.next_page()
    assert paged.current_page() is None
    paged.prev_page()
    assert paged.current_page() == [6, 7]
    paged.set_cursor(1)
    assert paged.current_page() == [3, 4, 5]
    assert paged.first_page() == [0, 1, 2]
    assert paged.last_page() == [6, 7]


def test_page_containing_element(paged):
    assert 4 in paged.page_containing(4)
    assert paged.cursor == 1
    assert paged.page_containing(65) is None


# ─── Mutation ────────────────────────────────────────────────────

def test_append_one(paged):
    paged.append(8)
    assert len(paged) == 9
    assert paged.all_elements()[-1] == 8
    assert paged.page_count == 3


def test_extend_many(paged):
    paged.extend([8, 9, 10, 11, 12])
    assert len(paged) == 13
    assert paged.page_count == 5


def test_insert_at_global_index(paged):
    paged.insert(0, -1)
    assert paged.page_at(0) == [-1, 0, 1]


def test_insert_in_page_position(paged):
    paged.insert_in_page(1, 0, 99)
    assert paged.page_at(1) == [99, 3, 4]
    assert len(paged) == 9


@pytest.mark.parametrize("index", [-1, 9, 50])
def test_insert_out_of_range_raises_and_leaves_collection(paged, index):
    with pytest.raises(InvalidInputError):
        paged.insert(index, 99)
    assert paged.all_elements() == list(range(8))


def test_insert_at_end_is_allowed(paged):
    paged.insert(8, 99)
    assert paged.page_at(2) == [6, 7, 99]


@pytest.mark.parametrize("page_index,position_index", [
    (0, -1),
    (0, 50),
    (-2, 0),
    (4, 0),
    (2, 3),
])
def test_insert_in_page_out_of_range_raises_and_leaves_collection(
    paged, page_index, position_index,
):
    with pytest.raises(InvalidInputError):
        paged.insert_in_page(page_index, position_index, 99)
    assert paged.all_elements() == list(range(8))
    assert paged.page_count == 3


def test_insert_in_page_at_page_end_is_allowed(paged):
    paged.insert_in_page(0, 3, 99)
    assert paged.page_at(1) == [99, 3, 4]


def test_insert_in_page_into_empty_collection():
    collection = PagedCollection(3)
    collection.insert_in_page(0, 0, "a")
    assert collection.page_at(0) == ["a"]


def test_remove_one(paged):
    assert paged.remove(4) is True
    assert not paged.contains(4)
    assert 4 not in paged


def test_remove_missing_returns_false(paged):
    assert paged.remove(65) is False
    assert len(paged) == 8


def test_clear_contents(paged):
    paged.clear()
    assert paged.is_empty()
    assert paged.page_count == 0


def test_sort_inverse(paged):
    paged.sort(reverse=True)
    assert paged.current_page() == [7, 6, 5]
    assert paged.current_page() == [4, 3, 2]
    assert paged.current_page() == [1, 0]


def test_every_mutation_resets_cursor(paged):
    mutations = [
        lambda c: c.append(8),
        lambda c: c.insert(0, -1),
        lambda c: c.insert_in_page(0, 1, 50),
        lambda c: c.extend([9, 10]),
        lambda c: c.remove(3),
        lambda c: c.remove(1000),
        lambda c: c.sort(key=lambda e: -e),
        lambda c: c.clear(),
    ]
    for mutate in mutations:
        paged.set_cursor(2)
        mutate(paged)
        assert paged.cursor == 0


def test_removing_last_page_recomputes_page_count():
    collection = PagedCollection(3, range(4))
    assert collection.page_count == 2
    collection.remove(3)
    assert collection.page_count == 1


# ─── Traversal ───────────────────────────────────────────────────

def test_iteration_is_restartable_and_ignores_cursor(paged):
    paged.set_cursor(2)
    assert list(paged) == list(range(8))
    assert list(paged) == list(range(8))
    assert paged.cursor == 2


def test_iteration_yields_no_none(paged):
    for element in paged:
        assert element is not None
