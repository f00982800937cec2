#!/usr/bin/env python3
"""Run random legal move sequences and check the puzzle invariants after every move.

Each walk also replays its inverse and expects the solved state back.
"""
from __future__ import annotations

import logging
from collections import Counter

import click
import jax
import numpy as np
from tqdm import trange

from tesserax.core.moves import inverse
from tesserax.core.pieces import (
    EMPTY,
    exposure_mask,
    piece_color_sets,
    solved_hypercube,
    solved_state,
    to_hypercube,
)
from tesserax.core.puzzle import Puzzle
from tesserax.utils.logging_config import setup_logging
from tesserax.utils.util import states_equal

logger = logging.getLogger("tesserax.scripts.check_label_conservation")


def _check(puzzle: Puzzle, solved_pieces: Counter, mask: np.ndarray) -> list[str]:
    problems = []
    hyper = to_hypercube(puzzle.state)
    if not np.array_equal(np.asarray(hyper) != EMPTY, mask):
        problems.append("exposure pattern changed")
    if Counter(piece_color_sets(hyper)) != solved_pieces:
        problems.append("piece colours changed")
    if not puzzle.legal_moves():
        problems.append("no legal move")
    middle, outer = puzzle.middle_slice_pos, puzzle.outer_slice_pos
    if middle == -2 * outer or not -2 <= middle <= 2:
        problems.append(f"middle slice at {middle} with outer slice at {outer}")
    return problems


@click.command()
@click.option("--walks", default=20, show_default=True, help="Number of random walks.")
@click.option("--length", default=50, show_default=True, help="Moves per walk.")
@click.option("--seed", default=0, show_default=True, help="PRNG seed.")
def check_label_conservation(walks: int, length: int, seed: int) -> None:
    setup_logging(logging.INFO)
    solved_pieces = Counter(piece_color_sets(solved_hypercube()))
    mask = exposure_mask()
    key = jax.random.PRNGKey(seed)
    failures = 0

    for walk in trange(walks):
        key, subkey = jax.random.split(key)
        draws = jax.random.uniform(subkey, (length,)).tolist()
        puzzle = Puzzle()
        moves = []
        for draw in draws:
            legal = puzzle.legal_moves()
            move = legal[min(int(draw * len(legal)), len(legal) - 1)]
            puzzle.apply_move(move)
            moves.append(move)
            problems = _check(puzzle, solved_pieces, mask)
            if problems:
                failures += 1
                logger.error("walk %d after %s: %s", walk, " ".join(map(str, moves)), "; ".join(problems))
                break
        else:
            for move in reversed(moves):
                puzzle.apply_move(inverse(move))
            if not states_equal(puzzle.state, solved_state()):
                failures += 1
                logger.error("walk %d did not return to solved after undoing", walk)

    if failures:
        raise SystemExit(f"{failures} of {walks} walks failed")
    logger.info("All %d walks kept their invariants", walks)


if __name__ == "__main__":
    check_label_conservation()
