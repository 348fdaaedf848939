import unittest

from korsord.core.constants import Direction
from korsord.core.models import Cell, Word
from korsord.engine.grid import CrosswordGrid
from korsord.engine.numbering import compute_numbers
from korsord.engine.placement import apply_placement


def place(grid: CrosswordGrid, word_id: str, answer: str, x: int, y: int, direction: Direction) -> CrosswordGrid:
    result, grid = apply_placement(grid, Word(word_id, answer), x, y, direction)
    assert result.ok, result
    return grid


class NumberingTests(unittest.TestCase):
    def test_single_across_word_on_small_grid(self) -> None:
        grid = place(CrosswordGrid(5), "katt", "KATT", 0, 0, Direction.ACROSS)
        numbers = compute_numbers(grid)
        self.assertEqual(numbers[(0, 0)], 1)
        # Every top-row cell has grid space below it, so each begins down.
        self.assertEqual(numbers, {(0, 0): 1, (1, 0): 2, (2, 0): 3, (3, 0): 4})

    def test_crossing_words_number_in_scan_order(self) -> None:
        grid = place(CrosswordGrid(5), "katt", "KATT", 0, 0, Direction.ACROSS)
        grid = place(grid, "tunn", "TUNN", 3, 0, Direction.DOWN)
        numbers = compute_numbers(grid)
        self.assertEqual(numbers[(3, 0)], 4)
        # (3, 1): nothing to its left and room to the right -> begins across.
        self.assertEqual(numbers[(3, 1)], 5)
        self.assertEqual(numbers[(3, 2)], 6)
        self.assertEqual(numbers[(3, 3)], 7)
        self.assertEqual(sorted(numbers.values()), list(range(1, 8)))

    def test_last_row_and_column_without_space_are_not_numbered(self) -> None:
        grid = CrosswordGrid(3).evolve(
            cells={
                (2, 2): Cell(letter="A", owner_word_id="w", owner_direction=Direction.ACROSS),
                (1, 2): Cell(letter="B", owner_word_id="w", owner_direction=Direction.ACROSS),
            }
        )
        numbers = compute_numbers(grid)
        # (1, 2) begins across (x + 1 < 3); (2, 2) has no room in either direction.
        self.assertEqual(numbers, {(1, 2): 1})

    def test_blocked_cells_are_skipped_and_break_runs(self) -> None:
        grid = CrosswordGrid(4).evolve(
            cells={
                (0, 1): Cell.blocked(),
                (1, 1): Cell(letter="A", owner_word_id="w", owner_direction=Direction.ACROSS),
                (2, 1): Cell(letter="B", owner_word_id="w", owner_direction=Direction.ACROSS),
            }
        )
        numbers = compute_numbers(grid)
        self.assertNotIn((0, 1), numbers)
        self.assertEqual(numbers[(1, 1)], 1)
        # (2, 1) has a letter to its left but nothing above, so it begins down.
        self.assertEqual(numbers[(2, 1)], 2)

    def test_numbering_is_deterministic(self) -> None:
        grid = place(CrosswordGrid(7), "a", "SOL", 1, 1, Direction.ACROSS)
        grid = place(grid, "b", "LAMPA", 3, 1, Direction.DOWN)
        self.assertEqual(compute_numbers(grid), compute_numbers(grid))

    def test_empty_grid_has_no_numbers(self) -> None:
        self.assertEqual(compute_numbers(CrosswordGrid(15)), {})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
