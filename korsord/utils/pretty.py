"""Pretty-print helpers for crossword grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from ..core.models import Cell, Word
    from ..engine.autoplacer import AutoPlaceResult
    from ..engine.grid import CrosswordGrid


BLOCKED_SYMBOL = "#"
EMPTY_SYMBOL = "."


def cell_symbol(cell: Optional[Cell]) -> str:
    if cell is None:
        return EMPTY_SYMBOL
    if cell.is_blocked:
        return BLOCKED_SYMBOL
    return cell.letter or EMPTY_SYMBOL


def format_grid(grid: CrosswordGrid) -> str:
    size = grid.size
    header_cells = [f"{x:>2}" for x in range(size)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * size - 1))
    for y in range(size):
        row_render = " ".join(f"{cell_symbol(grid.get(x, y)):>2}" for x in range(size))
        lines.append(f"{y:>2} | {row_render}")
    return "\n".join(lines)


def print_layout_stats(
    result: AutoPlaceResult,
    words: Sequence[Word],
    *,
    stream=None,
) -> None:
    """Print grid + summary stats for an auto placement result."""

    from ..io.serialization import compute_stats

    stream = stream or sys.stdout
    print(format_grid(result.grid), file=stream)

    stats = compute_stats(result.grid, words)
    grid_stats = stats["grid"]
    word_stats = stats["words"]

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid_stats['size']} x {grid_stats['size']} ({grid_stats['total_cells']} cells)", file=stream)
    print(f"  Letters:       {grid_stats['letter_cells']}", file=stream)
    print(f"  Blocked:       {grid_stats['blocked_cells']}", file=stream)
    if grid_stats["bounding_box"]:
        min_x, min_y, max_x, max_y = grid_stats["bounding_box"]
        print(f"  Used area:     {max_x - min_x + 1} x {max_y - min_y + 1}", file=stream)

    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {word_stats['placed']}/{word_stats['total']}", file=stream)
    print(f"  Across/Down:   {word_stats['across']}/{word_stats['down']}", file=stream)
    if word_stats["placed"]:
        print(f"  Length range:  {word_stats['length_min']}-{word_stats['length_max']}", file=stream)
    if result.unplaced:
        print(f"  Unplaced:      {', '.join(result.unplaced)}", file=stream)

    print(file=stream)
    print("--- Search ---", file=stream)
    print(f"  Outcome:       {'complete' if result.ok else result.reason.value}", file=stream)
    if result.nodes:
        print(f"  Nodes:         {result.nodes}", file=stream)
    if result.stopped_by:
        print(f"  Stopped by:    {result.stopped_by}", file=stream)
    if result.ok:
        print(f"  Layout score:  {result.score:.1f}", file=stream)
