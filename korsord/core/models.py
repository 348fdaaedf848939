"""Data models supporting the placement engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .constants import Direction, FailureReason
from ..data.normalization import normalize_answer


WordId = str
Coord = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """A stored grid cell. Frozen so grid values can share instances."""

    letter: str = ""
    is_blocked: bool = False
    owner_word_id: Optional[WordId] = None
    owner_direction: Optional[Direction] = None

    @classmethod
    def blocked(cls) -> "Cell":
        return cls(is_blocked=True)

    @property
    def has_letter(self) -> bool:
        return bool(self.letter)


@dataclass(frozen=True)
class Word:
    """An answer/clue pair supplied by the host."""

    id: WordId
    answer: str
    clue: str = ""

    @property
    def normalized(self) -> str:
        return normalize_answer(self.answer)

    def __len__(self) -> int:
        return len(self.normalized)


@dataclass(frozen=True)
class Placement:
    """Where a word sits: start coordinate, direction and letter count."""

    x: int
    y: int
    direction: Direction
    length: int

    @property
    def end(self) -> Coord:
        dx, dy = self.direction.step
        return self.x + dx * (self.length - 1), self.y + dy * (self.length - 1)

    def coords(self) -> Iterator[Coord]:
        dx, dy = self.direction.step
        for index in range(self.length):
            yield self.x + dx * index, self.y + dy * index

    def covers(self, x: int, y: int) -> bool:
        dx, dy = self.direction.step
        if dx:
            return y == self.y and self.x <= x < self.x + self.length
        return x == self.x and self.y <= y < self.y + self.length


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of validating or applying a single placement."""

    ok: bool
    crossings: int = 0
    reason: Optional[FailureReason] = None

    @classmethod
    def success(cls, crossings: int) -> "PlacementResult":
        return cls(ok=True, crossings=crossings)

    @classmethod
    def failure(cls, reason: FailureReason) -> "PlacementResult":
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class Candidate:
    """A legal position for one word together with its ranking score."""

    x: int
    y: int
    direction: Direction
    score: float
    crossings: int = 0


@dataclass
class ClueEntry:
    """A numbered clue as consumed by a player view."""

    id: WordId
    number: int
    question: str
    answer: str
    direction: Direction
    start_x: int
    start_y: int
