from __future__ import annotations

import pytest

from page_sync.sync import InvalidPageRangeError, compute_targets


def test_three_surfaces_centered_on_trigger() -> None:
    assert compute_targets(["A", "B", "C"], 1, 5, 10) == [4, 5, 6]


def test_first_surface_triggers_at_page_one() -> None:
    assert compute_targets(["A", "B"], 0, 1, 10) == [1, 2]


def test_left_neighbour_clamped_to_first_page() -> None:
    assert compute_targets(["A", "B"], 1, 1, 5) == [1, 1]


def test_right_neighbours_capped_at_max_page() -> None:
    assert compute_targets(["A", "B", "C", "D"], 0, 9, 10) == [9, 10, 10, 10]


def test_far_left_surfaces_never_go_below_one() -> None:
    targets = compute_targets(list("abcdef"), 5, 3, 10)

    assert targets == [1, 1, 1, 1, 2, 3]


@pytest.mark.parametrize("max_page", [1, 2, 7, 30])
def test_staircase_invariant(max_page: int) -> None:
    ordered = list(range(5))
    for trigger in range(len(ordered)):
        for current in range(1, max_page + 1):
            targets = compute_targets(ordered, trigger, current, max_page)

            assert len(targets) == len(ordered)
            assert targets[trigger] == current
            for left, right in zip(targets, targets[1:]):
                assert right >= left
                if right - left != 1:
                    assert right == left and left in (1, max_page)
            assert all(1 <= page <= max_page for page in targets)


def test_single_surface_keeps_its_page() -> None:
    assert compute_targets(["only"], 0, 4, 9) == [4]


def test_max_page_below_one_is_rejected() -> None:
    with pytest.raises(InvalidPageRangeError) as excinfo:
        compute_targets(["A", "B"], 0, 1, 0)

    assert excinfo.value.max_page == 0


def test_current_page_outside_range_is_rejected() -> None:
    with pytest.raises(InvalidPageRangeError):
        compute_targets(["A", "B"], 0, 11, 10)
    with pytest.raises(InvalidPageRangeError):
        compute_targets(["A", "B"], 0, 0, 10)


def test_trigger_index_outside_sequence_is_rejected() -> None:
    with pytest.raises(InvalidPageRangeError):
        compute_targets(["A", "B"], 2, 1, 10)


def test_invalid_page_range_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        compute_targets(["A"], 0, 1, -3)
