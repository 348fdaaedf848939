"""Crossword grid placement engine for Swedish word lists.

This package exposes the public API surface via:

- ``korsord.engine.builder.CrosswordBuilder``: one puzzle under manual and automatic placement.
- ``korsord.engine.autoplacer.AutoPlacer``: backtracking or CP-SAT layout of a whole word list.
- ``korsord.io.serialization`` helpers: the host's flat cell list and clue list.
"""

from .core.constants import Direction, FailureReason
from .core.models import Word
from .engine.autoplacer import AutoPlaceConfig, AutoPlacer, AutoPlaceResult, CancellationToken
from .engine.builder import CrosswordBuilder

__all__ = [
    "AutoPlaceConfig",
    "AutoPlacer",
    "AutoPlaceResult",
    "CancellationToken",
    "CrosswordBuilder",
    "Direction",
    "FailureReason",
    "Word",
]

__version__ = "0.1.0"
