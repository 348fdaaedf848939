"""Host-facing builder: manual editing plus automatic layout of one puzzle."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_GRID_SIZE, Direction
from ..core.models import PlacementResult, Word, WordId
from ..io.serialization import build_clue_list, clue_to_jsonable, grid_from_cells, grid_to_cells
from .autoplacer import AutoPlaceConfig, AutoPlacer, AutoPlaceResult, CancellationToken, ProgressCallback
from .grid import CrosswordGrid
from .numbering import compute_numbers
from .placement import PlacementController
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class CrosswordBuilder:
    """One puzzle being edited: its words, its grid and both placement modes.

    Failed placements come back as :class:`PlacementResult` values and leave
    the grid untouched; unknown word ids raise
    :class:`~korsord.core.exceptions.UnknownWordError`.
    """

    def __init__(
        self,
        words: Iterable[Word],
        grid_size: int = DEFAULT_GRID_SIZE,
        initial_cells: Optional[Sequence[Mapping[str, Any]]] = None,
        config: Optional[AutoPlaceConfig] = None,
    ) -> None:
        words = list(words)
        grid = grid_from_cells(initial_cells, words, grid_size) if initial_cells else None
        self.controller = PlacementController(words, grid_size=grid_size, grid=grid)
        self.auto_placer = AutoPlacer(config, validator=self.controller.validator)

    @property
    def grid(self) -> CrosswordGrid:
        return self.controller.grid

    @property
    def words(self) -> List[Word]:
        return list(self.controller.words.values())

    # ------------------------------------------------------------------
    # Manual API
    # ------------------------------------------------------------------
    def place_word(self, word_id: WordId, x: int, y: int, direction: Direction | str) -> PlacementResult:
        return self.controller.place(word_id, x, y, Direction.parse(direction))

    def remove_word(self, word_id: WordId) -> None:
        self.controller.remove(word_id)

    def toggle_blocked(self, x: int, y: int) -> bool:
        return self.controller.toggle_blocked(x, y)

    def clear_grid(self) -> None:
        self.controller.clear()

    # ------------------------------------------------------------------
    # Auto API
    # ------------------------------------------------------------------
    def auto_place(
        self,
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> AutoPlaceResult:
        """Lay out every word; the grid is replaced only on success."""

        result = self.auto_placer.solve(self.words, self.grid, progress=progress, cancel=cancel)
        if result.ok:
            self.controller.grid = result.grid
        return result

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def numbers(self):
        return compute_numbers(self.grid)

    def export_cells(self) -> List[dict]:
        return grid_to_cells(self.grid)

    def export_clues(self) -> List[dict]:
        return [clue_to_jsonable(entry) for entry in build_clue_list(self.grid, self.words)]

    def unplaced_word_ids(self) -> List[WordId]:
        return [word.id for word in self.controller.unplaced_words()]
