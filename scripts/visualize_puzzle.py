"""CLI tool to print a tesserax puzzle and the moves available from it.

Example::

    python -m scripts.visualize_puzzle --scramble 5 --seed 3

The command prints the (optionally scrambled or loaded) puzzle, its status
and every legal move, optionally followed by the state after each move.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
import jax
import termcolor

from tesserax.controller import PuzzleController
from tesserax.core.moves import MoveType
from tesserax.core.puzzle import Puzzle
from tesserax.utils.logging_config import setup_logging


def _status_line(controller: PuzzleController) -> str:
    status = controller.get_status()
    colour = "green" if status == "Solved" else "yellow"
    return f"{termcolor.colored(status, colour)} | Move Count: {controller.get_turn_count()}"


@click.command()
@click.option("--seed", default=42, show_default=True, help="PRNG seed for reproducible scrambles.")
@click.option(
    "--scramble",
    "scramble_length",
    default=0,
    show_default=True,
    help="Random moves to apply; 0 leaves the puzzle solved, -1 runs a full scramble.",
)
@click.option(
    "--open",
    "open_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Puzzle document to load instead of scrambling.",
)
@click.option(
    "--neighbours/--no-neighbours",
    default=False,
    help="Also print the state reached by every legal move.",
)
@click.option("--debug/--no-debug", default=False, help="Enable debug logging.")
def visualize_puzzle(
    seed: int,
    scramble_length: int,
    open_path: Optional[Path],
    neighbours: bool,
    debug: bool,
) -> None:
    setup_logging(logging.DEBUG if debug else logging.WARNING)
    controller = PuzzleController(seed=seed)

    if open_path is not None:
        if not controller.open_file(open_path):
            raise click.BadParameter(f"Could not load puzzle document {open_path}")
    elif scramble_length != 0:
        key = jax.random.PRNGKey(seed)
        controller.scramble_puzzle(max(scramble_length, 0), key=key)

    click.echo(str(controller.puzzle))
    click.echo(_status_line(controller))
    click.echo("\nLegal moves:")

    legal = controller.puzzle.legal_moves()
    for family in MoveType:
        names = [str(move) for move in legal if move.type == family]
        click.echo(f"{family.name:12s} {' '.join(names) if names else '-'}")

    if neighbours:
        for idx, move in enumerate(legal):
            neighbour = Puzzle(controller.puzzle.state)
            neighbour.apply_move(move)
            click.echo(f"\n[{idx:02d}] {move}")
            click.echo(str(neighbour))


if __name__ == "__main__":
    visualize_puzzle()
