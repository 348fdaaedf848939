import io
import json
import tempfile
import unittest
from pathlib import Path

from korsord import cli
from korsord.core.constants import Direction, FailureReason
from korsord.core.exceptions import UnknownWordError
from korsord.core.models import Word
from korsord.engine.builder import CrosswordBuilder
from korsord.engine.autoplacer import AutoPlacer
from korsord.utils.pretty import format_grid, print_layout_stats



WORDS = [
    Word("katt", "Katt", "Husdjur som jamar"),
    Word("tunn", "Tunn", "Motsats till tjock"),
]


class CrosswordBuilderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = CrosswordBuilder(WORDS, grid_size=5)

    def test_manual_editing(self) -> None:
        self.assertTrue(self.builder.place_word("katt", 0, 0, "across").ok)
        self.assertTrue(self.builder.place_word("tunn", 3, 0, Direction.DOWN).ok)
        self.assertEqual(self.builder.numbers()[(3, 0)], 4)
        self.builder.remove_word("tunn")
        self.assertEqual(self.builder.unplaced_word_ids(), ["tunn"])
        self.assertTrue(self.builder.toggle_blocked(4, 4))
        self.builder.clear_grid()
        self.assertTrue(self.builder.grid.is_empty())

    def test_unknown_word(self) -> None:
        with self.assertRaises(UnknownWordError):
            self.builder.place_word("hund", 0, 0, Direction.ACROSS)

    def test_auto_place_adopts_grid_on_success(self) -> None:
        result = self.builder.auto_place()
        self.assertTrue(result.ok)
        self.assertIs(self.builder.grid, result.grid)
        self.assertEqual(self.builder.unplaced_word_ids(), [])
        clues = self.builder.export_clues()
        self.assertEqual(sorted(c["id"] for c in clues), ["katt", "tunn"])

    def test_auto_place_keeps_grid_on_failure(self) -> None:
        words = [Word(str(i), "ABCD") for i in range(5)]
        builder = CrosswordBuilder(words, grid_size=3)
        before = builder.grid
        result = builder.auto_place()
        self.assertFalse(result.ok)
        self.assertEqual(result.reason, FailureReason.NO_SOLUTION_FOUND)
        self.assertIs(builder.grid, before)

    def test_initial_cells_are_loaded(self) -> None:
        self.builder.place_word("katt", 0, 0, Direction.ACROSS)
        cells = self.builder.export_cells()
        reloaded = CrosswordBuilder(WORDS, grid_size=5, initial_cells=cells)
        self.assertEqual(reloaded.grid, self.builder.grid)
        self.assertEqual(reloaded.unplaced_word_ids(), ["tunn"])

    def test_shares_validator_with_auto_placer(self) -> None:
        self.assertIsInstance(self.builder.auto_placer, AutoPlacer)
        self.assertIs(self.builder.auto_placer.validator, self.builder.controller.validator)


class PrettyTests(unittest.TestCase):
    def test_format_grid(self) -> None:
        builder = CrosswordBuilder(WORDS, grid_size=5)
        builder.place_word("katt", 0, 0, Direction.ACROSS)
        builder.toggle_blocked(4, 4)
        lines = format_grid(builder.grid).splitlines()
        self.assertEqual(len(lines), 7)
        self.assertEqual(lines[2].split(), ["0", "|", "K", "A", "T", "T", "."])
        self.assertEqual(lines[6].split()[-1], "#")

    def test_print_layout_stats(self) -> None:
        builder = CrosswordBuilder(WORDS, grid_size=9)
        result = builder.auto_place()
        stream = io.StringIO()
        print_layout_stats(result, WORDS, stream=stream)
        output = stream.getvalue()
        self.assertIn("Placed:        2/2", output)
        self.assertIn("complete", output)


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.root = Path(self.tmp.name)

    def write(self, name: str, payload) -> Path:
        path = self.root / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_writes_layout(self) -> None:
        words = self.write("words.json", [
            {"id": "katt", "answer": "katt", "clue": "Husdjur"},
            {"id": "tunn", "answer": "tunn", "clue": "Smal"},
        ])
        output = self.root / "out.json"
        code = cli.main([str(words), "--grid-size", "9", "--output", str(output), "--log-level", "ERROR"])
        self.assertEqual(code, cli.EXIT_OK)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["gridSize"], 9)
        self.assertEqual(payload["unplaced"], [])
        self.assertEqual(len(payload["clues"]), 2)
        self.assertEqual(sum(1 for cell in payload["grid"] if cell["letter"]), 7)

    def test_no_solution_exit_code(self) -> None:
        words = self.write("words.json", [{"id": str(i), "answer": "ABCD"} for i in range(5)])
        output = self.root / "out.json"
        code = cli.main([str(words), "--grid-size", "3", "--output", str(output), "--log-level", "ERROR"])
        self.assertEqual(code, cli.EXIT_NO_SOLUTION)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertFalse(payload["ok"])
        self.assertEqual(payload["reason"], "no solution found")

    def test_bad_input_exit_code(self) -> None:
        missing = self.root / "missing.json"
        self.assertEqual(cli.main([str(missing), "--log-level", "CRITICAL"]), cli.EXIT_ERROR)
        broken = self.write("broken.json", {"words": "nope"})
        self.assertEqual(cli.main([str(broken), "--log-level", "CRITICAL"]), cli.EXIT_ERROR)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
