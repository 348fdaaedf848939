"""Single-word placement: insert, move and remove under direct control."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from ..core.constants import DEFAULT_GRID_SIZE, Direction
from ..core.exceptions import UnknownWordError
from ..core.models import Cell, Coord, Placement, PlacementResult, Word, WordId
from .grid import CrosswordGrid, word_path
from .validator import PlacementValidator
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def vacate(grid: CrosswordGrid, word_id: WordId) -> CrosswordGrid:
    """Return ``grid`` without ``word_id``'s placement or its cells.

    A cell still covered by another placed word keeps its letter and is
    handed over to that word; every other owned cell is deleted.
    """

    changes: Dict[Coord, Optional[Cell]] = {}
    for x, y in grid.cells_of_word(word_id):
        others = grid.words_covering(x, y, exclude=word_id)
        if others:
            heir = others[0]
            changes[(x, y)] = Cell(
                letter=grid.get(x, y).letter,
                owner_word_id=heir,
                owner_direction=grid.placement_of(heir).direction,
            )
        else:
            changes[(x, y)] = None
    return grid.evolve(cells=changes, placements={word_id: None})


def apply_placement(
    grid: CrosswordGrid,
    word: Word,
    start_x: int,
    start_y: int,
    direction: Direction,
    validator: Optional[PlacementValidator] = None,
) -> Tuple[PlacementResult, CrosswordGrid]:
    """Validate and, on success, write ``word`` into a new grid value.

    The word's old footprint is vacated before validation, so a cell it shares
    with a crossing word is checked against that word's letter. The returned
    grid is ``grid`` itself whenever validation fails.
    """

    direction = Direction.parse(direction)
    base = vacate(grid, word.id)
    result = (validator or PlacementValidator()).validate(word, start_x, start_y, direction, base)
    if not result.ok:
        return result, grid

    answer = word.normalized
    writes: Dict[Coord, Optional[Cell]] = {}
    for x, y, index in word_path(start_x, start_y, len(answer), direction):
        writes[(x, y)] = Cell(letter=answer[index], owner_word_id=word.id, owner_direction=direction)
    placement = Placement(start_x, start_y, direction, len(answer))
    return result, base.evolve(cells=writes, placements={word.id: placement})


class PlacementController:
    """Owns the current grid value and applies one user action at a time."""

    def __init__(
        self,
        words: Iterable[Word],
        grid_size: int = DEFAULT_GRID_SIZE,
        grid: Optional[CrosswordGrid] = None,
        validator: Optional[PlacementValidator] = None,
    ) -> None:
        self.words: Dict[WordId, Word] = {}
        for word in words:
            self.words[word.id] = word
        self.grid = grid if grid is not None else CrosswordGrid(grid_size)
        self.validator = validator or PlacementValidator()

    def word(self, word_id: WordId) -> Word:
        try:
            return self.words[word_id]
        except KeyError:
            raise UnknownWordError(f"Unknown word id {word_id!r}") from None

    def place(self, word_id: WordId, start_x: int, start_y: int, direction: Direction) -> PlacementResult:
        word = self.word(word_id)
        result, self.grid = apply_placement(
            self.grid, word, start_x, start_y, direction, self.validator
        )
        if result.ok:
            LOGGER.debug(
                "Placed %s at (%s,%s) %s with %s crossings",
                word_id, start_x, start_y, Direction.parse(direction).value, result.crossings,
            )
        else:
            LOGGER.info(
                "Rejected %s at (%s,%s): %s", word_id, start_x, start_y, result.reason.value
            )
        return result

    def remove(self, word_id: WordId) -> None:
        self.word(word_id)
        self.grid = vacate(self.grid, word_id)

    def toggle_blocked(self, x: int, y: int) -> bool:
        """Flip the blocked state of a cell and return the new state.

        Blocking a lettered cell first removes every word running through it.
        """

        if not self.grid.in_bounds(x, y):
            raise ValueError(f"Cell {(x, y)} outside {self.grid.size}x{self.grid.size} grid")
        existing = self.grid.get(x, y)
        if existing is not None and existing.is_blocked:
            self.grid = self.grid.delete(x, y)
            return False
        grid = self.grid
        for word_id in grid.words_covering(x, y):
            LOGGER.info("Blocking (%s,%s) removes word %s", x, y, word_id)
            grid = vacate(grid, word_id)
        self.grid = grid.set(x, y, Cell.blocked())
        return True

    def clear(self) -> None:
        self.grid = self.grid.cleared()

    def placed_words(self) -> List[Word]:
        return [word for word_id, word in self.words.items() if word_id in self.grid.placements]

    def unplaced_words(self) -> List[Word]:
        return [word for word_id, word in self.words.items() if word_id not in self.grid.placements]
