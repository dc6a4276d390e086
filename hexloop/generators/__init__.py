"""
Loop and puzzle generators for hexagonal boards.
"""

from .loop_generator import RandomLoopGenerator, generate_random_solution
from .puzzle_generator import PuzzleGenerator, PuzzleGeneratorConfig

__all__ = [
    # Loop generation
    'RandomLoopGenerator', 'generate_random_solution',

    # Puzzle generation
    'PuzzleGenerator', 'PuzzleGeneratorConfig',
]
