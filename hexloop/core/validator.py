"""
Loop and win validation for hexagonal loop puzzles.
"""

from typing import Dict, List, Optional, Sequence

import networkx as nx
import numpy as np

from .board import Board
from .state import GameState, LineState


class ValidationResult:
    """Result of puzzle validation"""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.loop: List[int] = []

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        status = "Valid" if self.is_valid else "Invalid"
        return f"ValidationResult({status}, {len(self.errors)} errors, {len(self.warnings)} warnings)"


def _as_states(board: Board, line_states: Sequence[int]) -> np.ndarray:
    if len(line_states) != board.line_count:
        raise ValueError(
            f"Line state array has length {len(line_states)}, board has {board.line_count} lines"
        )
    return np.asarray(line_states)


def _filled_neighbors(board: Board, states: np.ndarray, vert_id: int, exclude: int) -> List[int]:
    return [line_id for line_id in board.verts[vert_id].lines
            if line_id != exclude and states[line_id] == LineState.FILLED]


def trace_loop(board: Board, line_states: Sequence[int]) -> Optional[List[int]]:
    """
    Walk the loop that starts at the lowest-id filled line.

    From the start line's end vertex, each step moves to the single other
    filled line at the current far vertex. The walk fails as soon as a
    vertex has zero or several other filled lines.

    Args:
        board: Board structure
        line_states: Line-state array of length ``board.line_count``

    Returns:
        Line ids in traversal order, or None if no closed loop is found.
        Filled lines not reachable from the start are not inspected.
    """
    states = _as_states(board, line_states)
    filled = np.flatnonzero(states == LineState.FILLED)
    if len(filled) == 0:
        return None

    start = int(filled[0])
    loop = [start]
    current = start
    vert = board.lines[start].end

    # A closed walk cannot be longer than the number of filled lines
    for _ in range(len(filled)):
        others = _filled_neighbors(board, states, vert, current)
        if len(others) != 1:
            return None
        current = others[0]
        if current == start:
            return loop
        loop.append(current)
        vert = board.other_vertex(current, vert)

    return None


def clues_satisfied(board: Board, line_states: Sequence[int], clues: Dict[int, int]) -> bool:
    """True iff every clued cell has exactly its clue count of filled lines"""
    states = _as_states(board, line_states)
    for cell_id, count in clues.items():
        filled = sum(1 for line_id in board.cells[cell_id].lines
                     if states[line_id] == LineState.FILLED)
        if filled != count:
            return False
    return True


def is_winning(board: Board, line_states: Sequence[int],
               clues: Optional[Dict[int, int]] = None) -> bool:
    """
    Check whether filled lines form exactly one loop matching all clues.

    Filled lines left over after the walk (a second cycle, a tail) make the
    state a loss. A state with no filled lines is never a win, even when
    every clue is 0, so the single-cell board with clue 0 has no solution.
    """
    loop = trace_loop(board, line_states)
    if loop is None:
        return False

    states = _as_states(board, line_states)
    if len(loop) != int(np.count_nonzero(states == LineState.FILLED)):
        return False

    return clues_satisfied(board, states, clues or {})


def filled_line_graph(board: Board, line_states: Sequence[int]) -> nx.Graph:
    """Graph of vertices joined by filled lines"""
    states = _as_states(board, line_states)
    graph = nx.Graph()
    for line_id in np.flatnonzero(states == LineState.FILLED):
        start, end = board.lines[int(line_id)].verts
        graph.add_edge(start, end, line=int(line_id))
    return graph


class LoopValidator:
    """Validates loop puzzle states"""

    @staticmethod
    def validate(board: Board, state: GameState) -> ValidationResult:
        """Validate a state as a complete solution"""
        result = ValidationResult()
        states = _as_states(board, state.lines)

        filled = int(np.count_nonzero(states == LineState.FILLED))
        if filled == 0:
            result.add_error("No filled lines")
            return result

        loop = trace_loop(board, states)
        if loop is None:
            result.add_error("Filled lines starting from the first filled line do not close into a simple loop")
        else:
            result.loop = loop
            if len(loop) != filled:
                components = nx.number_connected_components(filled_line_graph(board, states))
                result.add_error(
                    f"Loop covers {len(loop)} of {filled} filled lines ({components} filled components)"
                )

        for cell_id, count in sorted(state.clues.items()):
            actual = state.filled_count(cell_id, states)
            if actual != count:
                result.add_error(f"Cell {cell_id} has {actual} filled lines, clue is {count}")

        return result

    @staticmethod
    def validate_partial(board: Board, state: GameState) -> ValidationResult:
        """Validate an intermediate state: flag what can no longer become a solution"""
        result = ValidationResult()
        states = _as_states(board, state.lines)

        for vert in board.verts:
            degree = sum(1 for line_id in vert.lines if states[line_id] == LineState.FILLED)
            if degree > 2:
                result.add_error(f"Vertex {vert.id} has {degree} filled lines (branching)")

        for cell_id, count in sorted(state.clues.items()):
            lines = board.cells[cell_id].lines
            actual = sum(1 for line_id in lines if states[line_id] == LineState.FILLED)
            emptied = sum(1 for line_id in lines if states[line_id] == LineState.EMPTY)
            if actual > count:
                result.add_error(f"Cell {cell_id} exceeds its clue: {actual} > {count}")
            elif 6 - emptied < count:
                result.add_error(f"Cell {cell_id} cannot reach its clue: only {6 - emptied} lines left")
            elif actual < count:
                result.add_warning(f"Cell {cell_id} is incomplete: {actual} < {count}")

        return result

    @staticmethod
    def get_state_statistics(board: Board, state: GameState) -> dict:
        """Get various statistics about a state"""
        states = _as_states(board, state.lines)
        graph = filled_line_graph(board, states)
        return {
            'radius': board.R,
            'num_lines': board.line_count,
            'filled': int(np.count_nonzero(states == LineState.FILLED)),
            'empty': int(np.count_nonzero(states == LineState.EMPTY)),
            'undecided': int(np.count_nonzero(states == LineState.DEFAULT)),
            'num_clues': len(state.clues),
            'filled_components': nx.number_connected_components(graph) if graph.number_of_nodes() else 0,
            'is_winning': is_winning(board, states, state.clues),
        }
