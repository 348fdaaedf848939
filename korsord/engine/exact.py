"""CP-SAT layout solver using OR-Tools."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.exceptions import SolverUnavailableError
from ..core.models import Candidate, Coord, Word, WordId
from .grid import CrosswordGrid, word_path
from .ranker import CandidateRanker
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def solve_layout(
    words: Sequence[Word],
    grid: CrosswordGrid,
    ranker: CandidateRanker,
    time_limit_seconds: float = 10.0,
    workers: int = 4,
) -> Optional[Dict[WordId, Candidate]]:
    """Choose at most one position per word so that all letters agree.

    Args:
        words: Words to lay out; none of them may already be placed in ``grid``.
        grid: Base grid. Its blocked cells and letters are fixed.
        ranker: Supplies the legal positions of each word against ``grid``.
        time_limit_seconds: Solver time limit.
        workers: CP-SAT search workers.

    Returns:
        Mapping word id -> chosen candidate (words left out are missing), or
        None when the solver found no assignment before the time limit.
    """
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: one boolean per legal position
    # ------------------------------------------------------------------
    choices: Dict[WordId, List[Tuple[Candidate, cp_model.IntVar]]] = {}
    covering: Dict[Coord, List[cp_model.IntVar]] = defaultdict(list)
    letter_vars: Dict[Tuple[Coord, str], cp_model.IntVar] = {}
    total_letters = 0

    for w_index, word in enumerate(words):
        answer = word.normalized
        total_letters += len(answer)
        options: List[Tuple[Candidate, cp_model.IntVar]] = []
        for candidate in ranker.rank(word, grid):
            var = model.new_bool_var(
                f"p_{w_index}_{candidate.x}_{candidate.y}_{candidate.direction.value}"
            )
            options.append((candidate, var))
            for x, y, index in word_path(candidate.x, candidate.y, len(answer), candidate.direction):
                key = ((x, y), answer[index])
                if key not in letter_vars:
                    letter_vars[key] = model.new_bool_var(f"L_{x}_{y}_{answer[index]}")
                model.add_implication(var, letter_vars[key])
                covering[(x, y)].append(var)
        if options:
            model.add_at_most_one([var for _, var in options])
        else:
            LOGGER.debug("Word %s has no legal position", word.id)
        choices[word.id] = options

    # ------------------------------------------------------------------
    # Step 2: one letter per cell
    # ------------------------------------------------------------------
    by_cell: Dict[Coord, List[cp_model.IntVar]] = defaultdict(list)
    for (coord, _letter), var in letter_vars.items():
        by_cell[coord].append(var)
    for coord, letters_here in by_cell.items():
        if len(letters_here) > 1:
            model.add_at_most_one(letters_here)

    # ------------------------------------------------------------------
    # Step 3: objective, placed words first, then crossings
    # ------------------------------------------------------------------
    # One extra placed word outweighs any number of crossings.
    place_weight = 2 * total_letters + 1
    terms = []
    for options in choices.values():
        for candidate, var in options:
            terms.append((place_weight + candidate.crossings) * var)
    for coord, vars_here in covering.items():
        if len(vars_here) < 2:
            continue
        used = model.new_bool_var(f"U_{coord[0]}_{coord[1]}")
        model.add_max_equality(used, vars_here)
        # Each word beyond the first on a cell is one crossing.
        terms.append(sum(vars_here) - used)
    if terms:
        model.maximize(sum(terms))

    # ------------------------------------------------------------------
    # Step 4: solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = time_limit_seconds
    solver.parameters.num_workers = workers

    LOGGER.info(
        "CP-SAT: %d words, %d positions, %d letter vars, solving (timeout=%0.1fs)...",
        len(words),
        sum(len(options) for options in choices.values()),
        len(letter_vars),
        time_limit_seconds,
    )

    status = solver.solve(model)

    if status == cp_model.MODEL_INVALID:
        raise SolverUnavailableError("CP-SAT rejected the layout model as invalid")
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no layout found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info(
        "CP-SAT: %s layout found in %.2fs", solver.status_name(status), solver.wall_time
    )

    # ------------------------------------------------------------------
    # Step 5: extract chosen positions
    # ------------------------------------------------------------------
    chosen: Dict[WordId, Candidate] = {}
    for word_id, options in choices.items():
        for candidate, var in options:
            if solver.boolean_value(var):
                chosen[word_id] = candidate
                break
    return chosen
