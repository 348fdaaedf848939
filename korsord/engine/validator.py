"""Placement validation: fit, conflict and crossing checks for one word."""

from __future__ import annotations

from ..core.constants import Direction, FailureReason
from ..core.models import PlacementResult, Word
from .grid import CrosswordGrid, word_path
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class PlacementValidator:
    """Decides whether a word fits at a position without touching the grid.

    Safe to call speculatively any number of times: the grid is only read.
    """

    def validate(
        self,
        word: Word,
        start_x: int,
        start_y: int,
        direction: Direction,
        grid: CrosswordGrid,
    ) -> PlacementResult:
        direction = Direction.parse(direction)
        answer = word.normalized
        if not answer:
            return PlacementResult.failure(FailureReason.EMPTY_ANSWER)

        dx, dy = direction.step
        end_x = start_x + dx * (len(answer) - 1)
        end_y = start_y + dy * (len(answer) - 1)
        if not grid.in_bounds(start_x, start_y) or not grid.in_bounds(end_x, end_y):
            return PlacementResult.failure(FailureReason.OUT_OF_BOUNDS)

        crossings = 0
        for x, y, index in word_path(start_x, start_y, len(answer), direction):
            existing = grid.get(x, y)
            if existing is None:
                continue
            if existing.is_blocked:
                return PlacementResult.failure(FailureReason.BLOCKED_CELL)
            if existing.owner_word_id == word.id or not existing.has_letter:
                continue
            if existing.letter != answer[index]:
                return PlacementResult.failure(FailureReason.LETTER_CONFLICT)
            crossings += 1
        return PlacementResult.success(crossings)
