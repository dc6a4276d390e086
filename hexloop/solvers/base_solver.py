"""
Base solver class for hexagonal loop puzzles.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Callable, Set
from dataclasses import dataclass, field, fields
import time
from pathlib import Path

import yaml

from ..core.board import Board
from ..core.state import GameState
from ..core.utils import setup_logger, memory_usage


@dataclass
class SolverConfig:
    """Configuration for puzzle solvers"""
    time_limit: float = 60.0  # seconds
    max_states: Optional[int] = None  # enumeration budget, None for unbounded
    chunk_size: int = 4096  # states checked between yield points
    verbose: bool = False
    log_file: Optional[Path] = None

    # Algorithm-specific parameters
    extra_params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SolverConfig':
        """Build a config, routing unknown keys into ``extra_params``"""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        if extra:
            kwargs['extra_params'] = {**kwargs.get('extra_params', {}), **extra}
        if kwargs.get('log_file'):
            kwargs['log_file'] = Path(kwargs['log_file'])
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path, section: Optional[str] = None) -> 'SolverConfig':
        """Load configuration from a YAML file, optionally from one top-level section"""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if section is not None:
            data = data.get(section, {})
        return cls.from_dict(data)


@dataclass
class SolverResult:
    """Result from puzzle solver"""
    success: bool
    solutions: Set[int] = field(default_factory=set)
    solve_time: float = 0.0
    iterations: int = 0
    memory_used: float = 0.0  # MB
    message: str = ""

    # Additional information
    finished: bool = False
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_unique(self) -> bool:
        return self.finished and len(self.solutions) == 1

    def __repr__(self):
        status = "Success" if self.success else "Failed"
        return f"SolverResult({status}, solutions={len(self.solutions)}, time={self.solve_time:.2f}s, iterations={self.iterations})"


class BaseSolver(ABC):
    """Abstract base class for loop puzzle solvers"""

    def __init__(self, config: Optional[SolverConfig] = None):
        """Initialize solver with configuration."""
        self.config = config or SolverConfig()
        self.logger = setup_logger(
            self.__class__.__name__,
            self.config.log_file,
            "DEBUG" if self.config.verbose else "INFO"
        )

        # Callbacks for monitoring progress
        self._progress_callbacks: List[Callable] = []

        # Statistics tracking
        self._start_time: Optional[float] = None
        self._iterations: int = 0

    def add_progress_callback(self, callback: Callable):
        """Add a callback function to monitor solving progress."""
        self._progress_callbacks.append(callback)

    def solve(self, board: Board, state: GameState) -> SolverResult:
        """Solve the puzzle held in ``state`` (its clues) on ``board``."""
        self.logger.info(f"Starting {self.__class__.__name__} solver")
        self.logger.info(f"Board: {board}, {len(state.clues)} clues")

        if state.board is not board:
            raise ValueError("State is paired with a different board")

        self._start_time = time.time()
        self._iterations = 0
        initial_memory = memory_usage()

        try:
            result = self._solve(board, state)

            result.solve_time = time.time() - self._start_time
            result.memory_used = memory_usage() - initial_memory
            result.iterations = self._iterations

            if result.success:
                self.logger.info(
                    f"Found {len(result.solutions)} solution(s) in {result.solve_time:.2f}s "
                    f"with {result.iterations} iterations"
                )
            else:
                self.logger.warning(f"Failed to solve: {result.message}")

            return result

        except Exception as e:
            self.logger.error(f"Error during solving: {str(e)}", exc_info=True)
            return SolverResult(
                success=False,
                message=f"Solver error: {str(e)}",
                solve_time=time.time() - self._start_time,
                iterations=self._iterations
            )

    @abstractmethod
    def _solve(self, board: Board, state: GameState) -> SolverResult:
        """Implement the specific solving algorithm."""
        pass

    def _increment_iteration(self, count: int = 1):
        self._iterations += count

    def _call_progress_callbacks(self, stats: Optional[Dict[str, Any]] = None):
        """Call all registered progress callbacks"""
        for callback in self._progress_callbacks:
            try:
                callback(self._iterations, stats or {})
            except Exception as e:
                self.logger.error(f"Error in progress callback: {e}")
