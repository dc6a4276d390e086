"""
Brute-force enumeration of line-state assignments.

Every assignment is an integer code in ``[0, 2^L)``; bit ``k`` decides whether
line ``k`` is FILLED or EMPTY. Enumeration runs in fixed-size chunks so it can
be interleaved with an interactive loop, and keeps a cursor so a stopped run
resumes at the first unvisited code.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional, Set

from ..core.board import Board
from ..core.state import GameState
from ..core.validator import is_winning
from .base_solver import BaseSolver, SolverConfig, SolverResult

# Reasons an enumeration call returned
STOP_EXHAUSTED = 'exhausted'
STOP_BUDGET = 'budget'
STOP_TIMEOUT = 'timeout'
STOP_CANCELLED = 'cancelled'
STOP_CHUNK = 'chunk'


@dataclass
class EnumerationResult:
    """Summary of one enumeration call"""
    start: int
    cursor: int
    states_visited: int
    elapsed: float
    finished: bool
    stopped_by: str
    new_solutions: Set[int] = field(default_factory=set)

    def __repr__(self):
        return (f"EnumerationResult({self.start}->{self.cursor}, visited={self.states_visited}, "
                f"found={len(self.new_solutions)}, stopped_by={self.stopped_by})")


class BruteForceEnumerator:
    """
    Resumable enumerator over all ``2^L`` line-state codes.

    The paired state's line array is overwritten for every code checked;
    callers must not run two passes over the same state at once.

    Attributes:
        cursor: First code not yet visited
        solutions: Winning codes found so far, across all calls
        states_visited: Total codes checked across all calls
    """

    def __init__(self, board: Board, state: GameState, chunk_size: int = 4096,
                 clues: Optional[Dict[int, int]] = None):
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive: {chunk_size}")
        if state.board is not board:
            raise ValueError("State is paired with a different board")

        self.board = board
        self.state = state
        self.chunk_size = chunk_size
        self.clues = state.clues if clues is None else clues
        self.total = 1 << board.line_count

        self.cursor = 0
        self.solutions: Set[int] = set()
        self.states_visited = 0

    @property
    def finished(self) -> bool:
        return self.cursor >= self.total

    @property
    def remaining(self) -> int:
        return self.total - self.cursor

    def reset(self):
        """Forget progress and found solutions"""
        self.cursor = 0
        self.solutions = set()
        self.states_visited = 0

    def run_chunk(self, limit: Optional[int] = None) -> Set[int]:
        """
        Check the next chunk of codes.

        Args:
            limit: Optional cap below ``chunk_size``

        Returns:
            Winning codes found in this chunk
        """
        count = min(self.chunk_size, self.remaining)
        if limit is not None:
            count = min(count, limit)

        found = set()
        for code in range(self.cursor, self.cursor + count):
            self.state.apply_code(code)
            if is_winning(self.board, self.state.lines, self.clues):
                found.add(code)

        self.cursor += count
        self.states_visited += count
        self.solutions.update(found)
        return found

    def chunks(self, state_budget: Optional[int] = None,
               timeout: Optional[float] = None) -> Iterator[EnumerationResult]:
        """
        Run chunk by chunk, yielding after each one.

        The generator ends when the codes are exhausted, the budget is spent
        or the timeout has passed; closing it early keeps all progress.
        """
        started = time.time()
        visited = 0

        while not self.finished:
            if state_budget is not None and visited >= state_budget:
                return
            if timeout is not None and time.time() - started >= timeout:
                return

            start = self.cursor
            limit = None if state_budget is None else state_budget - visited
            found = self.run_chunk(limit)
            visited += self.cursor - start

            yield EnumerationResult(
                start=start,
                cursor=self.cursor,
                states_visited=self.cursor - start,
                elapsed=time.time() - started,
                finished=self.finished,
                stopped_by=STOP_EXHAUSTED if self.finished else STOP_CHUNK,
                new_solutions=found,
            )

    def run(self, state_budget: Optional[int] = None, timeout: Optional[float] = None,
            should_cancel: Optional[Callable[[], bool]] = None) -> EnumerationResult:
        """
        Enumerate until exhausted, out of budget, timed out or cancelled.

        Limits are checked only between chunks, so a call may overrun
        ``timeout`` by up to one chunk.

        Args:
            state_budget: Maximum number of codes to check in this call
            timeout: Wall-clock limit in seconds for this call
            should_cancel: Polled between chunks; True stops the run

        Returns:
            Summary with the resumption cursor
        """
        started = time.time()
        start = self.cursor
        found: Set[int] = set()
        stopped_by = STOP_EXHAUSTED

        while not self.finished:
            visited = self.cursor - start
            if state_budget is not None and visited >= state_budget:
                stopped_by = STOP_BUDGET
                break
            if timeout is not None and time.time() - started >= timeout:
                stopped_by = STOP_TIMEOUT
                break
            if should_cancel is not None and should_cancel():
                stopped_by = STOP_CANCELLED
                break

            limit = None if state_budget is None else state_budget - visited
            found |= self.run_chunk(limit)

        return EnumerationResult(
            start=start,
            cursor=self.cursor,
            states_visited=self.cursor - start,
            elapsed=time.time() - started,
            finished=self.finished,
            stopped_by=stopped_by,
            new_solutions=found,
        )


class BruteForceSolver(BaseSolver):
    """
    Exhaustive solver built on ``BruteForceEnumerator``.

    Works on a copy of the state so the player's lines are untouched.
    Exponential in the line count: only practical for radius 0 and 1 boards,
    or with a state budget.
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        super().__init__(config)
        self.enumerator: Optional[BruteForceEnumerator] = None

    def _solve(self, board: Board, state: GameState) -> SolverResult:
        work_state = state.copy()
        self.enumerator = BruteForceEnumerator(board, work_state, self.config.chunk_size)
        stop_after = self.config.extra_params.get('stop_after_solutions')

        budget = self.config.max_states
        stopped_by = STOP_EXHAUSTED
        for chunk in self.enumerator.chunks(state_budget=budget, timeout=self.config.time_limit):
            self._increment_iteration(chunk.states_visited)
            self._call_progress_callbacks({
                'cursor': chunk.cursor,
                'total': self.enumerator.total,
                'solutions': len(self.enumerator.solutions),
            })
            if stop_after and len(self.enumerator.solutions) >= stop_after:
                stopped_by = 'solution_limit'
                break

        if not self.enumerator.finished and stopped_by == STOP_EXHAUSTED:
            spent = budget is not None and self.enumerator.states_visited >= budget
            stopped_by = STOP_BUDGET if spent else STOP_TIMEOUT

        solutions = set(self.enumerator.solutions)
        if solutions:
            message = f"Found {len(solutions)} solution(s)"
        elif self.enumerator.finished:
            message = "No solution exists"
        else:
            message = f"No solution found before stopping ({stopped_by})"

        return SolverResult(
            success=bool(solutions),
            solutions=solutions,
            message=message,
            finished=self.enumerator.finished,
            stats={
                'cursor': self.enumerator.cursor,
                'total_states': self.enumerator.total,
                'stopped_by': stopped_by,
            }
        )
