#!/usr/bin/env python3
"""
Script to check or brute-force solve a single hexagonal loop puzzle.

Usage:
    python scripts/run_solver.py puzzle.json --check
    python scripts/run_solver.py puzzle.json --time-limit 30 --max-states 1000000
    python scripts/run_solver.py --generate 0 --verbose
"""

import click
import sys
from pathlib import Path
import json

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

import config
from hexloop.core.board import build_board
from hexloop.core.state import code_to_line_states
from hexloop.core.utils import ClueConverter, setup_logger, load_state, save_state
from hexloop.core.validator import LoopValidator
from hexloop.generators.puzzle_generator import PuzzleGenerator, PuzzleGeneratorConfig
from hexloop.solvers import get_solver, SolverConfig


@click.command()
@click.argument('puzzle_file', required=False, type=click.Path())
@click.option('--generate', '-g', type=click.IntRange(0, config.MAX_RADIUS),
              help='Generate a puzzle of this radius instead')
@click.option('--check', is_flag=True, help='Validate the saved line states instead of solving')
@click.option('--config-file', type=click.Path(exists=True), help='YAML solver configuration')
@click.option('--time-limit', '-t', type=float, default=config.ENUM_TIME_LIMIT,
              help='Time limit in seconds')
@click.option('--max-states', type=int, default=config.ENUM_MAX_STATES,
              help='Maximum number of line assignments to check')
@click.option('--chunk-size', type=int, default=config.ENUM_CHUNK_SIZE,
              help='Assignments checked between progress reports')
@click.option('--save-solution', '-s', type=click.Path(), help='Save first solution to file')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
def main(puzzle_file, generate, check, config_file, time_limit, max_states, chunk_size,
         save_solution, verbose):
    """Check or solve a hexagonal loop puzzle."""

    logger = setup_logger("PuzzleSolver", level="DEBUG" if verbose else config.LOG_LEVEL)

    if generate is not None:
        board = build_board(generate)
        state = PuzzleGenerator(PuzzleGeneratorConfig()).generate(board)
        if state is None:
            click.echo("Error: Failed to generate puzzle")
            sys.exit(1)
        state.solution = state.solution[:0]
    elif puzzle_file:
        puzzle_path = Path(puzzle_file)
        if not puzzle_path.exists():
            click.echo(f"Error: Puzzle file '{puzzle_file}' not found")
            sys.exit(1)
        try:
            state = load_state(puzzle_path)
        except (OSError, ValueError, KeyError) as e:
            click.echo(f"Error loading puzzle: {e}")
            sys.exit(1)
        logger.info(f"Loaded puzzle from {puzzle_path}")
    else:
        click.echo("Error: Either provide a puzzle file or use --generate")
        sys.exit(1)

    board = state.board
    logger.info(f"Puzzle: {board} with {len(state.clues)} clues")
    click.echo(ClueConverter.to_string(board, state.clues))

    if check:
        result = LoopValidator.validate(board, state)
        click.echo("Solved!" if result else "Not yet solved")
        for error in result.errors:
            click.echo(f"  - {error}")
        sys.exit(0 if result else 2)

    config.ensure_dirs()
    if config_file:
        solver_config = SolverConfig.from_yaml(Path(config_file), section='brute_force')
    else:
        solver_config = SolverConfig(
            time_limit=time_limit,
            max_states=max_states,
            chunk_size=chunk_size,
            verbose=verbose,
            log_file=config.RESULTS_LOGS_DIR / "run_solver.log"
        )
    solver = get_solver('brute_force', solver_config)

    if verbose:
        def progress_callback(iteration, stats):
            logger.debug(f"Checked {iteration} assignments: {stats}")
        solver.add_progress_callback(progress_callback)

    result = solver.solve(board, state)

    click.echo("\n" + "=" * 50)
    click.echo(f"Status: {'SUCCESS' if result.success else 'FAILED'}")
    click.echo(f"Time: {result.solve_time:.3f} seconds")
    click.echo(f"Assignments checked: {result.iterations}")
    click.echo(f"Memory: {result.memory_used:.1f} MB")
    click.echo(f"Message: {result.message}")
    if result.finished:
        click.echo(f"Unique: {'yes' if result.is_unique else 'no'}")
    else:
        click.echo(f"Resume cursor: {result.stats.get('cursor')}")
    click.echo("=" * 50 + "\n")

    if result.success and save_solution:
        state.load_lines(code_to_line_states(min(result.solutions), board.line_count))
        save_state(state, Path(save_solution))
        click.echo(f"Solution saved to {save_solution}")

    if verbose and result.solutions:
        click.echo(f"Solution codes: {json.dumps(sorted(result.solutions)[:20])}")


if __name__ == '__main__':
    main()
