"""
Mutable puzzle state: line states, generated solution and cell clues.
"""

import hashlib
import json
from enum import IntEnum
from typing import Dict, Iterable, List, MutableMapping, Optional, Sequence

import numpy as np

from .board import Board

MIN_CLUE = 0
MAX_CLUE = 6


class LineState(IntEnum):
    """State of a single line"""
    DEFAULT = 0  # not yet decided
    FILLED = 1
    EMPTY = 2


# DEFAULT -> FILLED -> EMPTY -> DEFAULT
_TOGGLE_NEXT = {
    LineState.DEFAULT: LineState.FILLED,
    LineState.FILLED: LineState.EMPTY,
    LineState.EMPTY: LineState.DEFAULT,
}


def image_hash(data: bytes) -> str:
    """SHA-256 content hash of an associated backdrop image"""
    return hashlib.sha256(data).hexdigest()


def code_to_line_states(code: int, line_count: int) -> np.ndarray:
    """
    Expand an integer into a line-state array.

    Bit ``k`` of ``code`` maps to line ``k``: set bits are FILLED, clear
    bits EMPTY.
    """
    if code < 0 or code >> line_count:
        raise ValueError(f"Code {code} does not fit in {line_count} lines")
    bits = np.fromiter(((code >> k) & 1 for k in range(line_count)),
                       dtype=np.int8, count=line_count)
    return np.where(bits == 1, LineState.FILLED, LineState.EMPTY).astype(np.int8)


def line_states_to_code(line_states: Sequence[int]) -> int:
    """Pack FILLED lines into an integer (bit ``k`` is line ``k``)"""
    code = 0
    for k, value in enumerate(line_states):
        if value == LineState.FILLED:
            code |= 1 << k
    return code


class GameState:
    """
    Point-in-time state of a board.

    Attributes:
        board: The board this state is paired with
        lines: Current state of every line, indexed by line id
        solution: Generated solution as a line-state array (empty until set)
        clues: Mapping of cell id to clue count
    """

    def __init__(self, board: Board):
        self.board = board
        self.lines: np.ndarray = np.full(board.line_count, LineState.DEFAULT, dtype=np.int8)
        self.solution: np.ndarray = np.zeros(0, dtype=np.int8)
        self.clues: Dict[int, int] = {}

    # =============================================================================
    # LINE ACCESS
    # =============================================================================

    def _check_line(self, line_id: int):
        if not 0 <= line_id < self.board.line_count:
            raise IndexError(f"Line id {line_id} out of range [0, {self.board.line_count})")

    def get_line(self, line_id: int) -> LineState:
        self._check_line(line_id)
        return LineState(int(self.lines[line_id]))

    def set_line(self, line_id: int, value: LineState) -> bool:
        """Set a line's state; returns True if it changed"""
        self._check_line(line_id)
        value = LineState(value)
        if self.lines[line_id] == value:
            return False
        self.lines[line_id] = value
        return True

    def fill(self, line_id: int) -> bool:
        return self.set_line(line_id, LineState.FILLED)

    def empty(self, line_id: int) -> bool:
        return self.set_line(line_id, LineState.EMPTY)

    def unset(self, line_id: int) -> bool:
        return self.set_line(line_id, LineState.DEFAULT)

    def toggle(self, line_id: int) -> bool:
        """Cycle DEFAULT -> FILLED -> EMPTY -> DEFAULT"""
        return self.set_line(line_id, _TOGGLE_NEXT[self.get_line(line_id)])

    def reset(self):
        """Return every line to DEFAULT"""
        self.lines.fill(LineState.DEFAULT)

    def load_lines(self, values: Sequence[int]):
        """Replace the whole line-state array"""
        if len(values) != self.board.line_count:
            raise ValueError(
                f"Line state array has length {len(values)}, board has {self.board.line_count} lines"
            )
        self.lines[:] = np.asarray(values, dtype=np.int8)

    def apply_code(self, code: int):
        """Overwrite line states from an enumeration code"""
        self.lines[:] = code_to_line_states(code, self.board.line_count)

    def filled_lines(self) -> List[int]:
        return [int(k) for k in np.flatnonzero(self.lines == LineState.FILLED)]

    # =============================================================================
    # SOLUTION AND CLUES
    # =============================================================================

    def set_solution(self, line_ids: Iterable[int]):
        """Record a generated loop as a FILLED/EMPTY array"""
        solution = np.full(self.board.line_count, LineState.EMPTY, dtype=np.int8)
        for line_id in line_ids:
            self._check_line(line_id)
            solution[line_id] = LineState.FILLED
        self.solution = solution

    def has_solution(self) -> bool:
        return len(self.solution) > 0

    def set_clue(self, cell_id: int, count: int) -> bool:
        if not 0 <= cell_id < self.board.cell_count:
            raise IndexError(f"Cell id {cell_id} out of range [0, {self.board.cell_count})")
        if not MIN_CLUE <= count <= MAX_CLUE:
            raise ValueError(f"Clue {count} outside [{MIN_CLUE}, {MAX_CLUE}]")
        if self.clues.get(cell_id) == count:
            return False
        self.clues[cell_id] = int(count)
        return True

    def clear_clue(self, cell_id: int) -> bool:
        return self.clues.pop(cell_id, None) is not None

    def filled_count(self, cell_id: int, line_states: Optional[np.ndarray] = None) -> int:
        """Number of FILLED lines around a cell"""
        states = self.lines if line_states is None else line_states
        return sum(1 for line_id in self.board.cells[cell_id].lines
                   if states[line_id] == LineState.FILLED)

    # =============================================================================
    # SERIALIZATION
    # =============================================================================

    def to_dict(self) -> dict:
        """Plain data snapshot (no object references)"""
        return {
            'radius': self.board.R,
            'lines': [int(x) for x in self.lines],
            'solution': [int(x) for x in self.solution],
            'clues': [[cid, count] for cid, count in sorted(self.clues.items())],
        }

    @classmethod
    def from_dict(cls, board: Board, data: dict) -> 'GameState':
        if data.get('radius', board.R) != board.R:
            raise ValueError(f"Snapshot radius {data['radius']} does not match board radius {board.R}")

        state = cls(board)
        if data.get('lines'):
            state.load_lines(data['lines'])
        solution = data.get('solution') or []
        if solution:
            if len(solution) != board.line_count:
                raise ValueError(
                    f"Solution array has length {len(solution)}, board has {board.line_count} lines"
                )
            state.solution = np.asarray(solution, dtype=np.int8)
        for cid, count in data.get('clues', []):
            state.set_clue(cid, count)
        return state

    def save_to_store(self, store: MutableMapping[str, str], image_digest: Optional[str] = None,
                      prefix: str = ''):
        """Write the snapshot as key -> JSON string pairs"""
        data = self.to_dict()
        for key in ('radius', 'lines', 'solution', 'clues'):
            store[prefix + key] = json.dumps(data[key])
        if image_digest is not None:
            store[prefix + 'image_hash'] = json.dumps(image_digest)

    @classmethod
    def load_from_store(cls, board: Board, store: MutableMapping[str, str],
                        prefix: str = '') -> 'GameState':
        data = {}
        for key in ('radius', 'lines', 'solution', 'clues'):
            if prefix + key in store:
                data[key] = json.loads(store[prefix + key])
        return cls.from_dict(board, data)

    def copy(self) -> 'GameState':
        new_state = GameState(self.board)
        new_state.lines = self.lines.copy()
        new_state.solution = self.solution.copy()
        new_state.clues = dict(self.clues)
        return new_state

    def __repr__(self):
        filled = int(np.count_nonzero(self.lines == LineState.FILLED))
        return f"GameState(R={self.board.R}, filled={filled}/{self.board.line_count}, clues={len(self.clues)})"


def init_state(board: Board) -> GameState:
    """Fresh state for a board: every line DEFAULT, no solution, no clues"""
    return GameState(board)


def stored_image_hash(store: MutableMapping[str, str], prefix: str = '') -> Optional[str]:
    """Image hash saved alongside a snapshot, if any"""
    raw = store.get(prefix + 'image_hash')
    return None if raw is None else json.loads(raw)
