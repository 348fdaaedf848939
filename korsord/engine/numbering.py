"""Clue numbering derived from grid topology."""

from __future__ import annotations

from typing import Dict

from ..core.models import Coord
from .grid import CrosswordGrid


def _open(grid: CrosswordGrid, x: int, y: int) -> bool:
    """True when ``(x, y)`` is in bounds, stored and not blocked."""

    if not grid.in_bounds(x, y):
        return False
    cell = grid.get(x, y)
    return cell is not None and not cell.is_blocked


def compute_numbers(grid: CrosswordGrid) -> Dict[Coord, int]:
    """Assign 1, 2, 3... to cells that start an across or down run.

    Cells are scanned row by row. A cell starts across when nothing usable
    sits to its left and the grid has room to its right; down is the same
    check upward and downward. Room means grid space, not an occupied
    neighbour, so a lone letter with free space after it is numbered too.

    Recomputed from scratch on every call: O(size²).
    """

    numbers: Dict[Coord, int] = {}
    counter = 1
    size = grid.size
    for y in range(size):
        for x in range(size):
            if not _open(grid, x, y):
                continue
            begins_across = not _open(grid, x - 1, y) and x + 1 < size
            begins_down = not _open(grid, x, y - 1) and y + 1 < size
            if begins_across or begins_down:
                numbers[(x, y)] = counter
                counter += 1
    return numbers
