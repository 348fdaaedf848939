"""JSON-ready interchange with the host application.

The host stores puzzles as a flat list of cells and a list of words; this
module converts between that shape and :class:`CrosswordGrid` values. Keys
follow the host's camelCase field names (``isBlocked``, ``ownerWordId``).
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_GRID_SIZE, DIRECTIONS, Direction
from ..core.exceptions import GridFormatError
from ..core.models import Cell, ClueEntry, Coord, Placement, Word, WordId
from ..data.normalization import normalize_answer
from ..engine.grid import CrosswordGrid, word_path
from ..engine.numbering import compute_numbers
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


# ----------------------------------------------------------------------
# Words
# ----------------------------------------------------------------------
def words_from_jsonable(payload: Any) -> List[Word]:
    """Parse ``[{id, answer, clue}]`` (or ``{"words": [...]}``) into words.

    ``question`` is accepted as an alias of ``clue``; a missing id falls back
    to the entry's list position.
    """

    if isinstance(payload, Mapping):
        payload = payload.get("words")
    if not isinstance(payload, list):
        raise GridFormatError("Words payload must be a list of objects")

    words: List[Word] = []
    seen: set = set()
    for index, entry in enumerate(payload):
        if not isinstance(entry, Mapping):
            raise GridFormatError(f"Word entry {index} is not an object")
        answer = entry.get("answer")
        if not isinstance(answer, str):
            raise GridFormatError(f"Word entry {index} has no answer text")
        word_id = str(entry.get("id", index))
        if word_id in seen:
            raise GridFormatError(f"Duplicate word id {word_id!r}")
        seen.add(word_id)
        clue = entry.get("clue", entry.get("question", ""))
        words.append(Word(id=word_id, answer=answer, clue=str(clue or "")))
    return words


def words_to_jsonable(words: Iterable[Word]) -> List[dict]:
    return [{"id": word.id, "answer": word.answer, "clue": word.clue} for word in words]


# ----------------------------------------------------------------------
# Cells
# ----------------------------------------------------------------------
def grid_to_cells(grid: CrosswordGrid) -> List[dict]:
    """Flat, row-major cell list with freshly computed clue numbers."""

    numbers = compute_numbers(grid)
    serialized: List[dict] = []
    for (x, y), cell in sorted(grid.items(), key=lambda item: (item[0][1], item[0][0])):
        number = numbers.get((x, y))
        entry: Dict[str, Any] = {"x": x, "y": y, "letter": cell.letter}
        if number is not None:
            entry["number"] = number
        entry["isStart"] = number is not None
        if cell.owner_direction is not None:
            entry["direction"] = cell.owner_direction.value
        if cell.owner_word_id is not None:
            entry["ownerWordId"] = cell.owner_word_id
        if cell.is_blocked:
            entry["isBlocked"] = True
        serialized.append(entry)
    return serialized


def grid_from_cells(
    cells: Sequence[Mapping[str, Any]],
    words: Sequence[Word] = (),
    grid_size: int = DEFAULT_GRID_SIZE,
) -> CrosswordGrid:
    """Rebuild a grid (cells and word placements) from a host cell list.

    Placements are recovered for every word that owns at least one cell:
    the word's path must cover all its owned cells and agree with every
    stored letter along the way. A word that owns no cell is looked for on
    paths made only of letters written by perpendicular words.
    """

    parsed: Dict[Coord, Cell] = {}
    for index, raw in enumerate(cells):
        if not isinstance(raw, Mapping):
            raise GridFormatError(f"Cell entry {index} is not an object")
        try:
            x, y = int(raw["x"]), int(raw["y"])
        except (KeyError, TypeError, ValueError) as exc:
            raise GridFormatError(f"Cell entry {index} has no valid x/y") from exc
        if not (0 <= x < grid_size and 0 <= y < grid_size):
            raise GridFormatError(f"Cell {(x, y)} outside {grid_size}x{grid_size} grid")
        if raw.get("isBlocked"):
            parsed[(x, y)] = Cell.blocked()
            continue
        letter = normalize_answer(str(raw.get("letter") or ""))[:1]
        direction = raw.get("direction")
        owner = raw.get("ownerWordId", raw.get("clueIndex"))
        try:
            parsed[(x, y)] = Cell(
                letter=letter,
                owner_word_id=str(owner) if owner is not None else None,
                owner_direction=Direction.parse(direction) if direction else None,
            )
        except ValueError as exc:
            raise GridFormatError(f"Cell {(x, y)} has invalid direction {direction!r}") from exc

    grid = CrosswordGrid(grid_size, cells=parsed)
    by_id = {word.id: word for word in words}
    owned: Dict[WordId, List[Coord]] = defaultdict(list)
    for coord, cell in parsed.items():
        if cell.owner_word_id is not None:
            owned[cell.owner_word_id].append(coord)

    placements: Dict[WordId, Placement] = {}
    for word_id, coords in owned.items():
        word = by_id.get(word_id)
        if word is None or not word.normalized:
            LOGGER.warning("Cells owned by unknown word %s kept without a placement", word_id)
            continue
        placement = _recover_placement(grid, word, coords)
        if placement is None:
            LOGGER.warning("Could not recover placement of word %s from its cells", word_id)
            continue
        placements[word_id] = placement

    # A word whose cells were all overwritten by crossing words owns nothing.
    for word in words:
        if word.id in placements or word.id in owned or not word.normalized:
            continue
        placement = _scan_crossed_placement(grid, word)
        if placement is not None:
            LOGGER.info("Recovered placement of word %s from crossing letters", word.id)
            placements[word.id] = placement
    return grid.evolve(placements=placements)


def _recover_placement(
    grid: CrosswordGrid, word: Word, coords: List[Coord]
) -> Optional[Placement]:
    answer = word.normalized
    directions = {grid.get(*coord).owner_direction for coord in coords} - {None}
    candidates = list(directions) or [Direction.ACROSS, Direction.DOWN]
    anchor_x, anchor_y = min(coords, key=lambda coord: (coord[1], coord[0]))
    for direction in candidates:
        dx, dy = direction.step
        for offset in range(len(answer)):
            start_x, start_y = anchor_x - dx * offset, anchor_y - dy * offset
            placement = Placement(start_x, start_y, direction, len(answer))
            if not all(placement.covers(x, y) for x, y in coords):
                continue
            if _letters_agree(grid, answer, placement):
                return placement
    return None


def _scan_crossed_placement(grid: CrosswordGrid, word: Word) -> Optional[Placement]:
    """First row-major position whose cells all belong to perpendicular words
    and spell the answer."""

    answer = word.normalized
    for y in range(grid.size):
        for x in range(grid.size):
            for direction in DIRECTIONS:
                placement = Placement(x, y, direction, len(answer))
                if not grid.in_bounds(*placement.end):
                    continue
                if not _letters_agree(grid, answer, placement):
                    continue
                crossed = all(
                    grid.get(cx, cy).owner_direction not in (None, direction)
                    for cx, cy in placement.coords()
                )
                if crossed:
                    return placement
    return None


def _letters_agree(grid: CrosswordGrid, answer: str, placement: Placement) -> bool:
    for x, y, index in word_path(placement.x, placement.y, placement.length, placement.direction):
        if not grid.in_bounds(x, y):
            return False
        cell = grid.get(x, y)
        if cell is None or cell.is_blocked or cell.letter != answer[index]:
            return False
    return True


# ----------------------------------------------------------------------
# Clues
# ----------------------------------------------------------------------
def build_clue_list(grid: CrosswordGrid, words: Sequence[Word]) -> List[ClueEntry]:
    """Numbered clues for every placed word, ordered by number then direction.

    A word's number is the number of its start cell; a start cell without a
    number falls back to the word's list position + 1.
    """

    numbers = compute_numbers(grid)
    entries: List[ClueEntry] = []
    for index, word in enumerate(words):
        placement = grid.placement_of(word.id)
        if placement is None:
            continue
        entries.append(
            ClueEntry(
                id=word.id,
                number=numbers.get((placement.x, placement.y), index + 1),
                question=word.clue,
                answer=word.normalized,
                direction=placement.direction,
                start_x=placement.x,
                start_y=placement.y,
            )
        )
    entries.sort(key=lambda entry: (entry.number, entry.direction.value))
    return entries


def clue_to_jsonable(entry: ClueEntry) -> dict:
    return {
        "id": entry.id,
        "number": entry.number,
        "question": entry.question,
        "answer": entry.answer,
        "direction": entry.direction.value,
        "startX": entry.start_x,
        "startY": entry.start_y,
    }


# ----------------------------------------------------------------------
# Stats
# ----------------------------------------------------------------------
def compute_stats(grid: CrosswordGrid, words: Sequence[Word]) -> dict:
    """Summary numbers for a layout, mirroring :func:`print_layout_stats`."""

    placed = [word for word in words if word.id in grid.placements]
    lengths = [len(word.normalized) for word in placed]
    box = grid.bounding_box()
    directions = Counter(grid.placement_of(word.id).direction.value for word in placed)
    return {
        "grid": {
            "size": grid.size,
            "total_cells": grid.size * grid.size,
            "letter_cells": grid.letter_count(),
            "blocked_cells": grid.blocked_count(),
            "bounding_box": list(box) if box else None,
        },
        "words": {
            "total": len(words),
            "placed": len(placed),
            "unplaced": [word.id for word in words if word.id not in grid.placements],
            "across": directions.get(Direction.ACROSS.value, 0),
            "down": directions.get(Direction.DOWN.value, 0),
            "length_min": min(lengths) if lengths else 0,
            "length_max": max(lengths) if lengths else 0,
        },
    }
