"""
Puzzle generator for hexagonal loop puzzles.
"""

import random
from typing import Dict, List, Optional

from ..core.board import Board
from ..core.state import GameState, init_state
from ..core.utils import setup_logger
from ..core.validator import is_winning
from ..solvers import BruteForceSolver, SolverConfig
from .loop_generator import RandomLoopGenerator


class PuzzleGeneratorConfig:
    """Configuration for puzzle generator"""

    def __init__(self, **kwargs):
        self.clue_ratio: float = kwargs.get('clue_ratio', 1 / 3)
        self.fill_ratio: float = kwargs.get('fill_ratio', 0.5)
        self.max_attempts: int = kwargs.get('max_attempts', 20)
        self.random_seed: Optional[int] = kwargs.get('random_seed', None)

        # Uniqueness checking is brute force, so only boards with few lines qualify
        self.verify_unique: bool = kwargs.get('verify_unique', False)
        self.max_verify_lines: int = kwargs.get('max_verify_lines', 24)
        self.solver_time_limit: float = kwargs.get('solver_time_limit', 10.0)

        if not 0 <= self.clue_ratio <= 1:
            raise ValueError(f"clue_ratio must be in [0, 1]: {self.clue_ratio}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1: {self.max_attempts}")


class PuzzleGenerator:
    """Generate loop puzzles: a random loop plus clues derived from it"""

    def __init__(self, config: Optional[PuzzleGeneratorConfig] = None):
        self.config = config or PuzzleGeneratorConfig()
        self.logger = setup_logger(self.__class__.__name__)
        self._rng = random.Random(self.config.random_seed)

    def generate(self, board: Board) -> Optional[GameState]:
        """
        Generate a puzzle on the given board.

        Args:
            board: Board structure

        Returns:
            State holding the solution and clues (all lines DEFAULT), or None
            if every attempt stalled
        """
        self.logger.info(f"Generating puzzle on {board}")

        for attempt in range(self.config.max_attempts):
            seed = self._rng.getrandbits(32)
            generator = RandomLoopGenerator(board, seed=seed, fill_ratio=self.config.fill_ratio)
            generator.run()
            loop = generator.loop()
            if not loop:
                self.logger.warning(f"Generation stalled on attempt {attempt + 1}, retrying")
                continue

            state = init_state(board)
            state.set_solution(loop)
            for cell_id, count in self.derive_clues(board, state).items():
                state.set_clue(cell_id, count)

            if not is_winning(board, state.solution, state.clues):
                self.logger.warning(f"Derived clues reject their own loop on attempt {attempt + 1}, retrying")
                continue

            if self._should_verify(board) and not self._has_unique_solution(board, state):
                self.logger.info(f"Clue set is not unique on attempt {attempt + 1}, retrying")
                continue

            self.logger.info(
                f"Generated puzzle on attempt {attempt + 1}: loop of {len(loop)} lines, {len(state.clues)} clues"
            )
            return state

        self.logger.error(f"Failed to generate puzzle after {self.config.max_attempts} attempts")
        return None

    def derive_clues(self, board: Board, state: GameState) -> Dict[int, int]:
        """Clue counts from the solution for a random subset of cells"""
        cell_ids: List[int] = [cell.id for cell in board.cells]
        if board.cell_count == 1:
            chosen = cell_ids
        else:
            k = round(self.config.clue_ratio * board.cell_count)
            chosen = self._rng.sample(cell_ids, k)
        return {cid: state.filled_count(cid, state.solution) for cid in sorted(chosen)}

    def _should_verify(self, board: Board) -> bool:
        return self.config.verify_unique and board.line_count <= self.config.max_verify_lines

    def _has_unique_solution(self, board: Board, state: GameState) -> bool:
        solver = BruteForceSolver(SolverConfig(
            time_limit=self.config.solver_time_limit,
            extra_params={'stop_after_solutions': 2},
        ))
        result = solver.solve(board, state)
        return result.is_unique
