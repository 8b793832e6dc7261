"""Deterministic left-to-right, top-to-bottom ordering of surfaces."""

from __future__ import annotations

from typing import Callable, Iterable, List, TypeVar

from .host import Position

S = TypeVar("S")


def order_surfaces(
    surfaces: Iterable[S], position: Callable[[S], Position]
) -> List[S]:
    """Sort ``surfaces`` by left offset, breaking ties with the top offset.

    ``position`` maps a surface to its ``(left, top)`` screen offset. The
    function has no side effects and returns a new list.
    """

    def sort_key(surface: S) -> Position:
        left, top = position(surface)
        return (left, top)

    return sorted(surfaces, key=sort_key)


__all__ = ["order_surfaces"]
