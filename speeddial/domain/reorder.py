"""Drag-and-drop reorder engine.

A reorder gesture reports ``(old_index, new_index)`` against the sequence the
user sees. ``move_item`` applies remove-then-insert semantics; tiles then get a
renumbering pass so their ``position`` fields form ``0..n-1`` again. Pages have
no rank field, their order is the list itself.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, TypeVar

from .entities import Tile

T = TypeVar("T")


def move_item(items: Sequence[T], old_index: int, new_index: int) -> List[T]:
    """Return a new list with the element at ``old_index`` moved to ``new_index``.

    Both indices must address the current sequence; out-of-range values are a
    caller bug and trip an assertion.
    """
    size = len(items)
    assert 0 <= old_index < size, f"old_index {old_index} out of range for {size} items"
    assert 0 <= new_index < size, f"new_index {new_index} out of range for {size} items"
    result = list(items)
    if old_index == new_index:
        return result
    moved = result.pop(old_index)
    result.insert(new_index, moved)
    return result


def renumber(tiles: Iterable[Tile]) -> List[Tile]:
    """Assign ``position = index`` in iteration order. Mutates and returns the tiles."""
    ordered = list(tiles)
    for index, tile in enumerate(ordered):
        tile.position = index
    return ordered


def sorted_by_position(tiles: Iterable[Tile]) -> List[Tile]:
    """Stable sort by ``position``; ties keep collection order."""
    return sorted(tiles, key=lambda tile: tile.position)


def tiles_on_page(tiles: Iterable[Tile], page_id: str) -> List[Tile]:
    return sorted_by_position(tile for tile in tiles if tile.page_id == page_id)


def renumber_all(tiles: Sequence[Tile]) -> None:
    """Restore the dense-permutation invariant on every page in place.

    Collection order is left alone; only ``position`` values change.
    """
    by_page: Dict[str, List[Tile]] = {}
    for tile in tiles:
        by_page.setdefault(tile.page_id, []).append(tile)
    for page_tiles in by_page.values():
        renumber(sorted_by_position(page_tiles))


def splice_page_tiles(tiles: Sequence[Tile], page_id: str, page_tiles: Sequence[Tile]) -> List[Tile]:
    """Write ``page_tiles`` back into the slots the page's tiles occupied."""
    replacements = iter(page_tiles)
    merged: List[Tile] = []
    for tile in tiles:
        merged.append(next(replacements) if tile.page_id == page_id else tile)
    merged.extend(replacements)
    return merged


__all__ = [
    "move_item",
    "renumber",
    "renumber_all",
    "sorted_by_position",
    "splice_page_tiles",
    "tiles_on_page",
]
