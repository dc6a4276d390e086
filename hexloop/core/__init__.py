# hexloop/core/__init__.py
"""
Core data structures and utilities for hexagonal loop puzzles.
"""

from .geometry import (
    BoardDimensions, cell_count, line_count, vert_count,
    cardinal_to_axial, axial_to_cardinal, is_on_board
)
from .board import Board, Cell, Line, Vertex, CellShuffle, build_board
from .state import GameState, LineState, init_state, image_hash
from .validator import LoopValidator, ValidationResult, trace_loop, is_winning
from .utils import (
    setup_logger, timer, memory_usage,
    ClueConverter, save_state_batch, load_state_batch,
    calculate_solution_stats
)

__all__ = [
    # Geometry
    'BoardDimensions', 'cell_count', 'line_count', 'vert_count',
    'cardinal_to_axial', 'axial_to_cardinal', 'is_on_board',

    # Data structures
    'Board', 'Cell', 'Line', 'Vertex', 'CellShuffle', 'build_board',
    'GameState', 'LineState', 'init_state', 'image_hash',

    # Validation
    'LoopValidator', 'ValidationResult', 'trace_loop', 'is_winning',

    # Utilities
    'setup_logger', 'timer', 'memory_usage',
    'ClueConverter', 'save_state_batch', 'load_state_batch',
    'calculate_solution_stats'
]
