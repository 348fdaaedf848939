"""Custom exception hierarchy for the placement engine.

Placement failures are ordinary outcomes and travel as
:class:`~korsord.core.models.PlacementResult` values. The exceptions below are
reserved for caller mistakes and malformed input.
"""


class KorsordError(Exception):
    """Base exception for engine failures."""


class UnknownWordError(KorsordError):
    """Raised when a word id is not registered with the controller."""


class GridFormatError(KorsordError):
    """Raised when a words or grid payload cannot be parsed."""


class SolverUnavailableError(KorsordError):
    """Raised when the exact layout model cannot be built or solved."""
