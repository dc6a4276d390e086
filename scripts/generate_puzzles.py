#!/usr/bin/env python3
"""
Script to generate hexagonal loop puzzles.

Usage:
    python scripts/generate_puzzles.py --count 10 --radius 4
    python scripts/generate_puzzles.py --batch 2:10 3:10 4:5 --seed 7
    python scripts/generate_puzzles.py --radius 0 --verify-unique
"""

import click
import sys
from pathlib import Path
from datetime import datetime
import json

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

import config
from hexloop.core.board import build_board
from hexloop.core.utils import ClueConverter, save_state_batch, calculate_solution_stats
from hexloop.generators.puzzle_generator import PuzzleGenerator, PuzzleGeneratorConfig


@click.command()
@click.option('--count', '-n', type=int, default=10,
              help='Number of puzzles to generate')
@click.option('--radius', '-r', type=click.IntRange(0, config.MAX_RADIUS),
              default=config.DEFAULT_RADIUS, help='Board radius')
@click.option('--batch', '-b', multiple=True,
              help='Batch generation (format: RADIUS:COUNT)')
@click.option('--output-dir', '-o', type=click.Path(), default=str(config.PUZZLES_DIR),
              help='Output directory for puzzles')
@click.option('--clue-ratio', type=float, default=config.CLUE_RATIO,
              help='Share of cells that receive a clue')
@click.option('--fill-ratio', type=float, default=config.FILL_RATIO,
              help='Share of cells enclosed by the generated loop')
@click.option('--verify-unique/--no-verify-unique', default=False,
              help='Brute-force check that clues admit one solution (tiny boards only)')
@click.option('--seed', type=int, default=None,
              help='Random seed for reproducibility')
@click.option('--show', is_flag=True, help='Print the first puzzle of each radius')
def main(count, radius, batch, output_dir, clue_ratio, fill_ratio, verify_unique, seed, show):
    """Generate hexagonal loop puzzles and save them as JSON snapshots."""

    click.echo("=" * 60)
    click.echo("Hexagonal Loop Puzzle Generator")
    click.echo("=" * 60)

    config.ensure_dirs()
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    generator = PuzzleGenerator(PuzzleGeneratorConfig(
        clue_ratio=clue_ratio,
        fill_ratio=fill_ratio,
        max_attempts=config.GENERATOR_MAX_ATTEMPTS,
        verify_unique=verify_unique,
        random_seed=seed
    ))

    # Determine what to generate
    generation_tasks = []
    if batch:
        click.echo("\nBatch generation:")
        for spec in batch:
            try:
                radius_str, count_str = spec.split(':')
                task = (int(radius_str), int(count_str))
            except ValueError:
                click.echo(f"Error parsing batch spec '{spec}' (format: RADIUS:COUNT)")
                sys.exit(1)
            if not 0 <= task[0] <= config.MAX_RADIUS:
                click.echo(f"Error: radius {task[0]} outside [0, {config.MAX_RADIUS}]")
                sys.exit(1)
            generation_tasks.append(task)
            click.echo(f"  - {task[1]} puzzles at radius {task[0]}")
    else:
        generation_tasks.append((radius, count))
        click.echo(f"\nGenerating {count} puzzles at radius {radius}")

    total_puzzles = sum(num for _, num in generation_tasks)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    # One entry per task, so a radius listed twice keeps both runs
    generated = []

    with click.progressbar(length=total_puzzles, label='Generating puzzles') as bar:
        for task_index, (task_radius, num) in enumerate(generation_tasks):
            board = build_board(task_radius)
            states = []
            for _ in range(num):
                state = generator.generate(board)
                if state is not None:
                    states.append(state)
                bar.update(1)

            if states:
                save_state_batch(states, output_path / f"radius_{task_radius}",
                                 prefix=f"r{task_radius}_{timestamp}_t{task_index}")
            generated.append(states)

    generated_count = sum(len(states) for states in generated)
    click.echo("\n\nGeneration complete!")
    click.echo(f"Successfully generated {generated_count}/{total_puzzles} puzzles")
    click.echo(f"Puzzles saved to: {output_path}")

    summary = {
        'timestamp': timestamp,
        'total_generated': generated_count,
        'configurations': [
            {'radius': r, 'requested': num, 'generated': len(states)}
            for (r, num), states in zip(generation_tasks, generated)
        ],
        'generator_config': {
            'clue_ratio': clue_ratio,
            'fill_ratio': fill_ratio,
            'verify_unique': verify_unique,
            'seed': seed
        }
    }
    summary_path = output_path / f"generation_summary_{timestamp}.json"
    with open(summary_path, 'w') as f:
        json.dump(summary, f, indent=2)
    click.echo(f"Generation summary saved to: {summary_path}")

    if show:
        for (task_radius, _), states in zip(generation_tasks, generated):
            if not states:
                continue
            sample = states[0]
            click.echo(f"\nSample puzzle (radius {task_radius}):")
            click.echo(ClueConverter.to_string(sample.board, sample.clues))
            stats = calculate_solution_stats(sample.board, sample.solution)
            click.echo(f"  Loop length: {stats['loop_length']}")
            click.echo(f"  Coverage: {stats['coverage']:.1%}")


if __name__ == '__main__':
    main()
