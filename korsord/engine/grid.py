"""Sparse grid representation and helper utilities."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..core.constants import DEFAULT_GRID_SIZE, Direction, in_bounds
from ..core.models import Cell, Coord, Placement, WordId
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

BoundingBox = Tuple[int, int, int, int]


def word_path(
    start_x: int, start_y: int, length: int, direction: Direction
) -> Iterator[Tuple[int, int, int]]:
    """Yield ``(x, y, index_in_word)`` for every cell a word would cover.

    Pure function of its inputs: calling it again restarts the walk. Bounds
    are not checked here.
    """

    dx, dy = Direction.parse(direction).step
    for index in range(length):
        yield start_x + dx * index, start_y + dy * index, index


class CrosswordGrid:
    """Square crossword grid holding only occupied or blocked cells.

    A grid value is never mutated after construction. ``set``, ``delete``
    and ``evolve`` return a new grid whose containers are fresh copies; the
    frozen :class:`Cell` instances themselves are shared between versions.
    """

    __slots__ = ("size", "_cells", "_placements")

    def __init__(
        self,
        size: int = DEFAULT_GRID_SIZE,
        cells: Optional[Mapping[Coord, Cell]] = None,
        placements: Optional[Mapping[WordId, Placement]] = None,
    ) -> None:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self._cells: Dict[Coord, Cell] = dict(cells or {})
        self._placements: Dict[WordId, Placement] = dict(placements or {})

    @classmethod
    def _adopt(
        cls,
        size: int,
        cells: Dict[Coord, Cell],
        placements: Dict[WordId, Placement],
    ) -> "CrosswordGrid":
        grid = cls.__new__(cls)
        grid.size = size
        grid._cells = cells
        grid._placements = placements
        return grid

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def get(self, x: int, y: int) -> Optional[Cell]:
        return self._cells.get((x, y))

    def set(self, x: int, y: int, cell: Cell) -> "CrosswordGrid":
        return self.evolve(cells={(x, y): cell})

    def delete(self, x: int, y: int) -> "CrosswordGrid":
        return self.evolve(cells={(x, y): None})

    def evolve(
        self,
        cells: Optional[Mapping[Coord, Optional[Cell]]] = None,
        placements: Optional[Mapping[WordId, Optional[Placement]]] = None,
    ) -> "CrosswordGrid":
        """Return a new grid with the given changes applied in one step.

        ``None`` values delete the corresponding cell or placement.
        """

        next_cells = dict(self._cells)
        for coord, cell in (cells or {}).items():
            if cell is None:
                next_cells.pop(coord, None)
            else:
                next_cells[coord] = cell
        next_placements = dict(self._placements)
        for word_id, placement in (placements or {}).items():
            if placement is None:
                next_placements.pop(word_id, None)
            else:
                next_placements[word_id] = placement
        return CrosswordGrid._adopt(self.size, next_cells, next_placements)

    def cleared(self) -> "CrosswordGrid":
        return CrosswordGrid(self.size)

    def items(self) -> Iterable[Tuple[Coord, Cell]]:
        return self._cells.items()

    def cells_of_word(self, word_id: WordId) -> List[Coord]:
        """Coordinates whose letter was last written by ``word_id``, row-major."""

        owned = [coord for coord, cell in self._cells.items() if cell.owner_word_id == word_id]
        return sorted(owned, key=lambda coord: (coord[1], coord[0]))

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(x, y, self.size)

    # ------------------------------------------------------------------
    # Placements
    # ------------------------------------------------------------------
    @property
    def placements(self) -> Mapping[WordId, Placement]:
        return MappingProxyType(self._placements)

    def placement_of(self, word_id: WordId) -> Optional[Placement]:
        return self._placements.get(word_id)

    def words_covering(self, x: int, y: int, exclude: Optional[WordId] = None) -> List[WordId]:
        return [
            word_id
            for word_id, placement in self._placements.items()
            if word_id != exclude and placement.covers(x, y)
        ]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def word_at(self, x: int, y: int, direction: Direction) -> List[Coord]:
        """Contiguous run of lettered, unblocked cells through ``(x, y)``."""

        cell = self.get(x, y)
        if cell is None or cell.is_blocked or not cell.has_letter:
            return []
        dx, dy = Direction.parse(direction).step
        start_x, start_y = x, y
        while self._is_letter(start_x - dx, start_y - dy):
            start_x -= dx
            start_y -= dy
        run: List[Coord] = []
        cx, cy = start_x, start_y
        while self._is_letter(cx, cy):
            run.append((cx, cy))
            cx += dx
            cy += dy
        return run

    def _is_letter(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        cell = self.get(x, y)
        return cell is not None and not cell.is_blocked and cell.has_letter

    def bounding_box(self) -> Optional[BoundingBox]:
        """``(min_x, min_y, max_x, max_y)`` over unblocked cells, if any."""

        coords = [coord for coord, cell in self._cells.items() if not cell.is_blocked]
        if not coords:
            return None
        xs = [x for x, _ in coords]
        ys = [y for _, y in coords]
        return min(xs), min(ys), max(xs), max(ys)

    def letter_count(self) -> int:
        return sum(1 for cell in self._cells.values() if cell.has_letter)

    def blocked_count(self) -> int:
        return sum(1 for cell in self._cells.values() if cell.is_blocked)

    def is_empty(self) -> bool:
        return not self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coord: object) -> bool:
        return coord in self._cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CrosswordGrid):
            return NotImplemented
        return (
            self.size == other.size
            and self._cells == other._cells
            and self._placements == other._placements
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"CrosswordGrid(size={self.size}, cells={len(self._cells)}, "
            f"words={len(self._placements)})"
        )
