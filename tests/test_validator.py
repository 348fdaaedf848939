import unittest

from korsord.core.constants import Direction, FailureReason
from korsord.core.models import Cell, Word
from korsord.engine.grid import CrosswordGrid
from korsord.engine.placement import apply_placement
from korsord.engine.validator import PlacementValidator


KATT = Word("katt", "katt", "Husdjur som jamar")
TUNN = Word("tunn", "tunn", "Motsats till tjock")


class PlacementValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = PlacementValidator()
        _, self.katt_grid = apply_placement(CrosswordGrid(5), KATT, 0, 0, Direction.ACROSS)

    def test_empty_answer_is_checked_first(self) -> None:
        result = self.validator.validate(Word("x", "123 -"), 99, 99, Direction.ACROSS, CrosswordGrid(5))
        self.assertFalse(result.ok)
        self.assertEqual(result.reason, FailureReason.EMPTY_ANSWER)

    def test_rejects_start_or_end_out_of_bounds(self) -> None:
        grid = CrosswordGrid(5)
        for x, y, direction in [(4, 4, Direction.ACROSS), (4, 4, Direction.DOWN), (2, 0, Direction.ACROSS), (-1, 0, Direction.DOWN), (0, 5, Direction.ACROSS)]:
            result = self.validator.validate(KATT, x, y, direction, grid)
            self.assertEqual(result.reason, FailureReason.OUT_OF_BOUNDS, (x, y, direction))

    def test_corner_rejects_any_multi_letter_word(self) -> None:
        for size in (3, 5, 15):
            grid = CrosswordGrid(size)
            result = self.validator.validate(Word("ab", "AB"), size - 1, size - 1, Direction.ACROSS, grid)
            self.assertEqual(result.reason, FailureReason.OUT_OF_BOUNDS)

    def test_single_letter_fits_in_corner(self) -> None:
        result = self.validator.validate(Word("i", "I"), 4, 4, Direction.ACROSS, CrosswordGrid(5))
        self.assertTrue(result.ok)

    def test_blocked_cell(self) -> None:
        grid = CrosswordGrid(5).set(2, 1, Cell.blocked())
        result = self.validator.validate(KATT, 0, 1, Direction.ACROSS, grid)
        self.assertEqual(result.reason, FailureReason.BLOCKED_CELL)

    def test_crossing_is_counted(self) -> None:
        result = self.validator.validate(TUNN, 3, 0, Direction.DOWN, self.katt_grid)
        self.assertTrue(result.ok)
        self.assertEqual(result.crossings, 1)

    def test_letter_conflict(self) -> None:
        xunn = Word("tunn", "XUNN")
        result = self.validator.validate(xunn, 3, 0, Direction.DOWN, self.katt_grid)
        self.assertFalse(result.ok)
        self.assertEqual(result.reason, FailureReason.LETTER_CONFLICT)

    def test_own_cells_are_not_conflicts(self) -> None:
        result = self.validator.validate(KATT, 0, 0, Direction.DOWN, self.katt_grid)
        self.assertTrue(result.ok)
        self.assertEqual(result.crossings, 0)
        shifted = self.validator.validate(KATT, 1, 0, Direction.ACROSS, self.katt_grid)
        self.assertTrue(shifted.ok)
        self.assertEqual(shifted.crossings, 0)

    def test_crossing_symmetry(self) -> None:
        _, tunn_grid = apply_placement(CrosswordGrid(5), TUNN, 3, 0, Direction.DOWN)
        from_katt = self.validator.validate(TUNN, 3, 0, Direction.DOWN, self.katt_grid)
        from_tunn = self.validator.validate(KATT, 0, 0, Direction.ACROSS, tunn_grid)
        self.assertEqual(from_katt.crossings, 1)
        self.assertEqual(from_tunn.crossings, 1)
        self.assertEqual(self.katt_grid.get(3, 0).letter, tunn_grid.get(3, 0).letter)

    def test_validation_never_writes(self) -> None:
        before = self.katt_grid
        snapshot = dict(before.items())
        self.validator.validate(TUNN, 3, 0, Direction.DOWN, before)
        self.validator.validate(Word("x", "XUNN"), 3, 0, Direction.DOWN, before)
        self.assertEqual(dict(before.items()), snapshot)

    def test_accepts_direction_strings(self) -> None:
        result = self.validator.validate(TUNN, 3, 0, "down", self.katt_grid)
        self.assertTrue(result.ok)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
