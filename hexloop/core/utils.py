"""
Utility functions for the hexloop puzzle core.
"""

import json
import logging
import time
from functools import wraps
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .board import Board, build_board
from .state import GameState, LineState
from .validator import trace_loop


def setup_logger(name: str, log_file: Optional[Path] = None, level: str = "INFO") -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator to time function execution"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        execution_time = time.time() - start_time

        # Try to get logger from first argument (usually self)
        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {execution_time:.3f} seconds")
        else:
            logging.getLogger(func.__module__).debug(f"{func.__name__} took {execution_time:.3f} seconds")

        return result
    return wrapper


def memory_usage():
    """Get current memory usage in MB"""
    import psutil
    import os
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class ClueConverter:
    """Convert cell clues between board ids and grid layouts"""

    @staticmethod
    def to_grid(board: Board, clues: Dict[int, int]) -> np.ndarray:
        """
        Convert clues to a 2D ``H x W`` grid indexed ``[row, col]``.
        -2: off board, -1: no clue, 0-6: clue
        """
        grid = np.full((board.dims.H, board.dims.W), -2, dtype=int)
        for cell in board.cells:
            col, row = cell.coord
            grid[row, col] = clues.get(cell.id, -1)
        return grid

    @staticmethod
    def from_grid(board: Board, grid: np.ndarray) -> Dict[int, int]:
        """Read clues back from a grid produced by ``to_grid``"""
        if grid.shape != (board.dims.H, board.dims.W):
            raise ValueError(f"Grid shape {grid.shape} does not match board grid {(board.dims.H, board.dims.W)}")
        clues = {}
        for cell in board.cells:
            col, row = cell.coord
            value = int(grid[row, col])
            if value >= 0:
                clues[cell.id] = value
        return clues

    @staticmethod
    def to_string(board: Board, clues: Dict[int, int]) -> str:
        """
        Text layout of the board: one line per row, shifted so that
        neighbouring rows interleave. '.' marks a cell without a clue.
        """
        rows: List[str] = []
        for row in range(board.dims.H):
            tokens = []
            for col in range(board.dims.W):
                cell = board.cell_at_axial(col, row)
                if cell is not None:
                    tokens.append(str(clues[cell.id]) if cell.id in clues else '.')
            indent = ' ' * abs(row - board.R)
            rows.append(indent + ' '.join(tokens))
        return '\n'.join(rows)

    @staticmethod
    def from_string(board: Board, s: str) -> Dict[int, int]:
        """Parse the layout written by ``to_string``"""
        lines = [line.split() for line in s.strip('\n').split('\n')]
        if len(lines) != board.dims.H:
            raise ValueError(f"Expected {board.dims.H} rows, got {len(lines)}")

        clues = {}
        for row, tokens in enumerate(lines):
            cells = [board.cell_at_axial(col, row) for col in range(board.dims.W)]
            cells = [cell for cell in cells if cell is not None]
            if len(tokens) != len(cells):
                raise ValueError(f"Row {row} has {len(tokens)} entries, expected {len(cells)}")
            for token, cell in zip(tokens, cells):
                if token != '.':
                    clues[cell.id] = int(token)
        return clues


def save_state_batch(states: List[GameState], directory: Path, prefix: str = "puzzle"):
    """Save multiple puzzle states to a directory"""
    directory.mkdir(parents=True, exist_ok=True)

    for i, state in enumerate(states):
        filename = directory / f"{prefix}_{i:04d}.json"
        save_state(state, filename)


def save_state(state: GameState, filepath: Path):
    """Save a state snapshot to a JSON file"""
    with open(filepath, 'w') as f:
        json.dump(state.to_dict(), f, indent=2)


def load_state(filepath: Path) -> GameState:
    """Load a state snapshot, building a board of the recorded radius"""
    with open(filepath, 'r') as f:
        data = json.load(f)
    return GameState.from_dict(build_board(data['radius']), data)


def load_state_batch(directory: Path, pattern: str = "*.json") -> List[GameState]:
    """Load multiple states from a directory"""
    states = []
    logger = logging.getLogger(__name__)

    for filepath in sorted(directory.glob(pattern)):
        try:
            states.append(load_state(filepath))
        except (OSError, ValueError, KeyError) as e:
            logger.warning(f"Error loading {filepath}: {e}")

    return states


def calculate_solution_stats(board: Board, line_states: np.ndarray) -> Dict[str, Any]:
    """Calculate statistics for a solution line-state array"""
    filled = [int(k) for k in np.flatnonzero(line_states == LineState.FILLED)]
    loop = trace_loop(board, line_states) if filled else None

    stats = {
        'loop_length': len(filled),
        'is_single_loop': loop is not None and len(loop) == len(filled),
        'boundary_lines_used': sum(1 for k in filled if board.lines[k].is_boundary),
        'coverage': len(filled) / board.line_count,
    }

    counts = [sum(1 for k in cell.lines if line_states[k] == LineState.FILLED) for cell in board.cells]
    stats['cell_count_distribution'] = {n: counts.count(n) for n in range(7) if counts.count(n)}

    return stats
