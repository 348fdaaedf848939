"""Shared constants and enumerations for the placement engine."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


DEFAULT_GRID_SIZE = 15


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        """(dx, dy) advanced per letter."""
        return (1, 0) if self is Direction.ACROSS else (0, 1)

    @classmethod
    def parse(cls, value: "Direction | str") -> "Direction":
        if isinstance(value, Direction):
            return value
        return cls(str(value).strip().lower())


# Enumeration order used by the ranker when scores tie.
DIRECTIONS: Tuple[Direction, ...] = (Direction.ACROSS, Direction.DOWN)


class FailureReason(str, Enum):
    """Why a placement (or a whole auto layout) did not succeed."""

    EMPTY_ANSWER = "empty answer"
    OUT_OF_BOUNDS = "out of bounds"
    BLOCKED_CELL = "blocked cell"
    LETTER_CONFLICT = "letter conflict"
    NO_SOLUTION_FOUND = "no solution found"


# Candidate scoring weights.
CROSSING_BONUS = 10.0
FRESH_CELL_BONUS = 0.1
CENTER_DISTANCE_PENALTY = 0.1
EMPTY_GRID_BONUS = 20.0

# Layout scoring: larger is better, rewards compact layouts.
LAYOUT_CELL_WEIGHT = 0.5


def in_bounds(x: int, y: int, size: int) -> bool:
    return 0 <= x < size and 0 <= y < size
