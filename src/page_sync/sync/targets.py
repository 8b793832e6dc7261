"""Staircase page targets for an ordered set of surfaces."""

from __future__ import annotations

from typing import List, Sequence


class InvalidPageRangeError(ValueError):
    """Raised when a viewer reports pages outside ``1..max_page``.

    This always points at a broken viewer integration, so it is never
    swallowed by the sync pass.
    """

    def __init__(
        self, message: str, *, current_page: int | None = None, max_page: int | None = None
    ) -> None:
        super().__init__(message)
        self.current_page = current_page
        self.max_page = max_page


def compute_targets(
    ordered: Sequence[object],
    triggering_index: int,
    current_page: int,
    max_page: int,
) -> List[int]:
    """Return the page each surface in ``ordered`` should show.

    The surface at ``triggering_index`` keeps ``current_page``. Each step to
    the left subtracts one page (floored at 1) and each step to the right adds
    one (capped at ``max_page``). Clamped neighbours may share a page.

    >>> compute_targets("abc", 1, 5, 10)
    [4, 5, 6]
    """

    if max_page < 1:
        raise InvalidPageRangeError(
            f"max_page must be >= 1, got {max_page}",
            current_page=current_page,
            max_page=max_page,
        )
    if not 1 <= current_page <= max_page:
        raise InvalidPageRangeError(
            f"current_page {current_page} outside 1..{max_page}",
            current_page=current_page,
            max_page=max_page,
        )
    if not 0 <= triggering_index < len(ordered):
        raise InvalidPageRangeError(
            f"triggering_index {triggering_index} outside 0..{len(ordered) - 1}"
        )

    targets: List[int] = []
    for index in range(len(ordered)):
        offset = index - triggering_index
        if offset < 0:
            targets.append(max(1, current_page + offset))
        elif offset > 0:
            targets.append(min(max_page, current_page + offset))
        else:
            targets.append(current_page)
    return targets


__all__ = ["InvalidPageRangeError", "compute_targets"]
