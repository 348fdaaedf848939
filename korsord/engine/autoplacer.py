"""Automatic layout of a whole word list.

Two strategies:
  1. ``backtracking`` (default): depth-first search over the ranked top
     candidates of each word, longest words first, skipping words that do not
     fit and abandoning a branch after too many consecutive skips. The first
     complete layout ends the search.
  2. ``exact``: CP-SAT model over every legal position of every word, which
     maximises placed words and then crossings (see :mod:`.exact`).
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..core.constants import FailureReason, LAYOUT_CELL_WEIGHT
from ..core.models import Word, WordId
from .grid import CrosswordGrid
from .placement import apply_placement, vacate
from .ranker import CandidateRanker
from .validator import PlacementValidator
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

STRATEGIES = ("backtracking", "exact")

ProgressCallback = Callable[[int, int], None]


@dataclass
class AutoPlaceConfig:
    top_k: int = 5
    max_skips: int = 3
    max_nodes: Optional[int] = 10_000
    time_limit_seconds: Optional[float] = None
    strategy: str = "backtracking"
    exact_time_limit_seconds: float = 10.0
    exact_workers: int = 4

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy {self.strategy!r}; expected one of {STRATEGIES}")
        if self.top_k < 1:
            raise ValueError("top_k must be at least 1")


class CancellationToken:
    """Thread-safe flag a host can set to stop a running search."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class AutoPlaceResult:
    ok: bool
    grid: CrosswordGrid
    placed: List[WordId] = field(default_factory=list)
    unplaced: List[WordId] = field(default_factory=list)
    score: float = float("-inf")
    reason: Optional[FailureReason] = None
    nodes: int = 0
    stopped_by: Optional[str] = None


class _SearchStopped(Exception):
    """Unwinds the recursion when a budget runs out or the host cancels."""

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause


def layout_score(grid: CrosswordGrid) -> float:
    """Compactness score of a layout: ``-bounding_box_area + 0.5 * letter_cells``."""

    box = grid.bounding_box()
    if box is None:
        return float("-inf")
    min_x, min_y, max_x, max_y = box
    area = (max_x - min_x + 1) * (max_y - min_y + 1)
    return -area + LAYOUT_CELL_WEIGHT * grid.letter_count()


def prepare_words(words: Sequence[Word]) -> List[Word]:
    """Drop empty answers and order the rest longest first, stably."""

    usable = [word for word in words if word.normalized]
    return sorted(usable, key=lambda word: len(word.normalized), reverse=True)


class AutoPlacer:
    """Places a whole word list into a grid, one strategy per configuration."""

    def __init__(
        self,
        config: Optional[AutoPlaceConfig] = None,
        validator: Optional[PlacementValidator] = None,
        ranker: Optional[CandidateRanker] = None,
    ) -> None:
        self.config = config or AutoPlaceConfig()
        self.validator = validator or PlacementValidator()
        self.ranker = ranker or CandidateRanker(self.validator)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def solve(
        self,
        words: Sequence[Word],
        grid: CrosswordGrid,
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> AutoPlaceResult:
        ordered = prepare_words(words)
        dropped = [word.id for word in words if not word.normalized]
        if dropped:
            LOGGER.info("Ignoring %d words with empty answers: %s", len(dropped), dropped)
        if not ordered:
            LOGGER.info("No placeable words; nothing to do")
            return AutoPlaceResult(
                ok=False, grid=grid, unplaced=dropped, reason=FailureReason.NO_SOLUTION_FOUND
            )

        LOGGER.info(
            "Auto placement of %d words on %sx%s grid (strategy=%s)",
            len(ordered), grid.size, grid.size, self.config.strategy,
        )
        if self.config.strategy == "exact":
            result = self._solve_exact(ordered, grid, cancel)
        else:
            result = _BacktrackingSearch(self, ordered, progress, cancel).run(grid)
        result.unplaced = dropped + result.unplaced
        if result.ok:
            LOGGER.info(
                "Auto placement completed: %d placed, %d unplaced, score %.1f",
                len(result.placed), len(result.unplaced), result.score,
            )
        else:
            LOGGER.warning(
                "Auto placement found no complete layout (%s); unplaced: %s",
                result.stopped_by or "search exhausted", result.unplaced,
            )
        return result

    # ------------------------------------------------------------------
    # Exact strategy
    # ------------------------------------------------------------------
    def _solve_exact(
        self,
        ordered: List[Word],
        grid: CrosswordGrid,
        cancel: Optional[CancellationToken],
    ) -> AutoPlaceResult:
        from .exact import solve_layout

        if cancel is not None and cancel.cancelled:
            return AutoPlaceResult(
                ok=False, grid=grid, unplaced=[w.id for w in ordered],
                reason=FailureReason.NO_SOLUTION_FOUND, stopped_by="cancelled",
            )

        base = grid
        for word in ordered:
            base = vacate(base, word.id)
        chosen = solve_layout(
            ordered, base, self.ranker,
            time_limit_seconds=self.config.exact_time_limit_seconds,
            workers=self.config.exact_workers,
        )
        if chosen is None:
            return AutoPlaceResult(
                ok=False, grid=grid, unplaced=[w.id for w in ordered],
                reason=FailureReason.NO_SOLUTION_FOUND, stopped_by="time_limit",
            )

        layout = base
        placed: List[WordId] = []
        unplaced: List[WordId] = []
        for word in ordered:
            candidate = chosen.get(word.id)
            if candidate is None:
                unplaced.append(word.id)
                continue
            result, layout = apply_placement(
                layout, word, candidate.x, candidate.y, candidate.direction, self.validator
            )
            if result.ok:
                placed.append(word.id)
            else:
                LOGGER.error(
                    "Exact layout position for %s rejected on replay: %s",
                    word.id, result.reason.value,
                )
                unplaced.append(word.id)

        ok = not unplaced
        return AutoPlaceResult(
            ok=ok,
            grid=layout if ok else grid,
            placed=placed,
            unplaced=unplaced,
            score=layout_score(layout),
            reason=None if ok else FailureReason.NO_SOLUTION_FOUND,
        )


class _BacktrackingSearch:
    """State of one backtracking run; discarded afterwards."""

    def __init__(
        self,
        placer: AutoPlacer,
        words: List[Word],
        progress: Optional[ProgressCallback],
        cancel: Optional[CancellationToken],
    ) -> None:
        self.placer = placer
        self.config = placer.config
        self.words = words
        self.progress = progress
        self.cancel = cancel
        self.nodes = 0
        self.deadline: Optional[float] = None
        self.best_grid: Optional[CrosswordGrid] = None
        self.best_score = float("-inf")
        self.deepest_grid: Optional[CrosswordGrid] = None
        self.deepest_count = -1

    def run(self, grid: CrosswordGrid) -> AutoPlaceResult:
        if self.config.time_limit_seconds is not None:
            self.deadline = time.monotonic() + self.config.time_limit_seconds
        self.deepest_grid = grid
        stopped_by: Optional[str] = None
        try:
            self._search(grid, 0, 0)
        except _SearchStopped as stop:
            stopped_by = stop.cause
            LOGGER.warning("Search stopped after %d nodes: %s", self.nodes, stop.cause)

        if self.best_grid is not None:
            placed, unplaced = self._partition(self.best_grid)
            return AutoPlaceResult(
                ok=True, grid=self.best_grid, placed=placed, unplaced=unplaced,
                score=self.best_score, nodes=self.nodes,
            )
        placed, unplaced = self._partition(self.deepest_grid)
        return AutoPlaceResult(
            ok=False, grid=grid, placed=placed, unplaced=unplaced,
            reason=FailureReason.NO_SOLUTION_FOUND, nodes=self.nodes, stopped_by=stopped_by,
        )

    def _partition(self, grid: CrosswordGrid):
        placed = [word.id for word in self.words if word.id in grid.placements]
        unplaced = [word.id for word in self.words if word.id not in grid.placements]
        return placed, unplaced

    def _tick(self) -> None:
        self.nodes += 1
        if self.cancel is not None and self.cancel.cancelled:
            raise _SearchStopped("cancelled")
        if self.config.max_nodes is not None and self.nodes > self.config.max_nodes:
            raise _SearchStopped("node_budget")
        if self.deadline is not None and time.monotonic() > self.deadline:
            raise _SearchStopped("time_limit")

    def _search(self, grid: CrosswordGrid, index: int, skips: int) -> bool:
        self._tick()
        if index == len(self.words):
            score = layout_score(grid)
            if self.best_grid is None or score > self.best_score:
                self.best_grid = grid
                self.best_score = score
            return True
        if skips > self.config.max_skips:
            return False

        placed_count = sum(1 for word in self.words if word.id in grid.placements)
        if placed_count > self.deepest_count:
            self.deepest_count = placed_count
            self.deepest_grid = grid

        word = self.words[index]
        if self.progress is not None:
            self.progress(index, len(self.words))
        candidates = self.placer.ranker.rank(word, grid)[: self.config.top_k]
        LOGGER.debug(
            "Word %d/%d %s: %d candidates (skips=%d)",
            index + 1, len(self.words), word.id, len(candidates), skips,
        )
        for candidate in candidates:
            result, next_grid = apply_placement(
                grid, word, candidate.x, candidate.y, candidate.direction, self.placer.validator
            )
            if not result.ok:
                continue
            if self._search(next_grid, index + 1, 0):
                return True
        return self._search(grid, index + 1, skips + 1)
