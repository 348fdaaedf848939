"""Enumerate and score every legal position of one word."""

from __future__ import annotations

from typing import List, Optional

from ..core.constants import (
    CENTER_DISTANCE_PENALTY,
    CROSSING_BONUS,
    DIRECTIONS,
    EMPTY_GRID_BONUS,
    FRESH_CELL_BONUS,
)
from ..core.models import Candidate, Word
from .grid import CrosswordGrid, word_path
from .validator import PlacementValidator


class CandidateRanker:
    """Scores positions for a word against a grid snapshot.

    Score terms:

    - ``+10`` per crossing with another word,
    - ``+0.1`` per path cell not yet present in the grid,
    - ``-0.1`` per unit of Manhattan distance between the start cell and the
      grid centre ``(size / 2, size / 2)``,
    - ``+20`` when the grid holds no cells at all.

    The result is sorted by score, highest first. Equal scores keep
    enumeration order: rows top to bottom, columns left to right, across
    before down.

    Positions running along an existing word in the same direction are legal
    whenever the letters agree, and every shared letter counts as a crossing.
    An answer contained in a placed answer (ATT inside KATT) therefore ranks
    the fully overlapping position first, and the auto placer will stack it
    there. Hosts that need distinct cells per word should filter such
    candidates or avoid substring answers in one word list.
    """

    def __init__(self, validator: Optional[PlacementValidator] = None) -> None:
        self.validator = validator or PlacementValidator()

    def rank(self, word: Word, grid: CrosswordGrid) -> List[Candidate]:
        length = len(word.normalized)
        if not length:
            return []
        size = grid.size
        center = size / 2
        empty_bonus = EMPTY_GRID_BONUS if grid.is_empty() else 0.0

        candidates: List[Candidate] = []
        for y in range(size):
            for x in range(size):
                for direction in DIRECTIONS:
                    dx, dy = direction.step
                    if x + dx * (length - 1) >= size or y + dy * (length - 1) >= size:
                        continue
                    result = self.validator.validate(word, x, y, direction, grid)
                    if not result.ok:
                        continue
                    fresh = sum(
                        1 for cx, cy, _ in word_path(x, y, length, direction)
                        if grid.get(cx, cy) is None
                    )
                    score = (
                        CROSSING_BONUS * result.crossings
                        + FRESH_CELL_BONUS * fresh
                        - CENTER_DISTANCE_PENALTY * (abs(x - center) + abs(y - center))
                        + empty_bonus
                    )
                    # Rounded so equal scores compare equal despite float drift.
                    candidates.append(
                        Candidate(x, y, direction, round(score, 6), result.crossings)
                    )
        # Stable sort: ties stay in enumeration order.
        candidates.sort(key=lambda candidate: candidate.score, reverse=True)
        return candidates
