"""
Game session: the board, its state and the operations a front end calls.

One session per interactive view; nothing here is module-global.
"""

import json
from typing import MutableMapping, Optional

from .core.board import Board, Cell, build_board
from .core.state import GameState, init_state, stored_image_hash
from .core.utils import setup_logger, timer
from .core.validator import LoopValidator, ValidationResult, is_winning
from .generators import PuzzleGenerator, PuzzleGeneratorConfig
from .solvers import BruteForceEnumerator

LINE_ACTIONS = ('fill', 'empty', 'toggle', 'unset')


class GameSession:
    """
    Holds the board and state for one radius selection.

    Changing the radius discards and rebuilds both; the board is never
    resized in place.
    """

    def __init__(self, radius: int = 0, generator_config: Optional[PuzzleGeneratorConfig] = None):
        self.logger = setup_logger(self.__class__.__name__)
        self.generator = PuzzleGenerator(generator_config)
        self.board: Board = build_board(radius)
        self.state: GameState = init_state(self.board)
        self._enumerator: Optional[BruteForceEnumerator] = None

    @property
    def radius(self) -> int:
        return self.board.R

    def set_radius(self, radius: int) -> bool:
        """Rebuild board and state for a new radius; returns True if rebuilt"""
        if radius == self.board.R:
            return False
        self.board = build_board(radius)
        self.state = init_state(self.board)
        self._enumerator = None
        self.logger.info(f"Rebuilt {self.board}")
        return True

    # =============================================================================
    # INTERACTION
    # =============================================================================

    def line_action(self, line_id: int, action: str) -> bool:
        """Apply 'fill', 'empty', 'toggle' or 'unset' to a line; True if it changed"""
        if action not in LINE_ACTIONS:
            raise ValueError(f"Unknown line action: {action}. Available: {list(LINE_ACTIONS)}")
        return getattr(self.state, action)(line_id)

    def cell_at_point(self, u: float, v: float) -> Optional[Cell]:
        return self.board.cell_at_point(u, v)

    def is_solved(self) -> bool:
        return is_winning(self.board, self.state.lines, self.state.clues)

    def check(self) -> ValidationResult:
        """Full validation with reasons, for feedback such as "not yet solved" """
        return LoopValidator.validate(self.board, self.state)

    # =============================================================================
    # GENERATION AND ENUMERATION
    # =============================================================================

    @timer
    def new_puzzle(self) -> bool:
        """Replace the state with a freshly generated puzzle; False if generation stalled"""
        state = self.generator.generate(self.board)
        if state is None:
            self.logger.warning("Puzzle generation stalled; keeping current state")
            return False
        self.state = state
        self._enumerator = None
        return True

    def enumerator(self, chunk_size: Optional[int] = None) -> BruteForceEnumerator:
        """
        Enumerator bound to this session's state, kept across calls so
        enumeration resumes where it stopped. It overwrites the session's
        line states while running.

        Args:
            chunk_size: New chunk size; applies to later chunks and keeps the
                cursor. None keeps the current size (4096 for a new enumerator).
        """
        if self._enumerator is None or self._enumerator.state is not self.state:
            self._enumerator = BruteForceEnumerator(
                self.board, self.state, 4096 if chunk_size is None else chunk_size)
        elif chunk_size is not None and chunk_size != self._enumerator.chunk_size:
            if chunk_size <= 0:
                raise ValueError(f"Chunk size must be positive: {chunk_size}")
            self._enumerator.chunk_size = chunk_size
        return self._enumerator

    # =============================================================================
    # PERSISTENCE
    # =============================================================================

    def snapshot(self, store: MutableMapping[str, str], image_digest: Optional[str] = None):
        self.state.save_to_store(store, image_digest)

    def restore(self, store: MutableMapping[str, str]) -> Optional[str]:
        """
        Load state from a store, rebuilding the board if the radius differs.

        Returns:
            The stored image hash, if any
        """
        if 'radius' in store:
            self.set_radius(json.loads(store['radius']))
        self.state = GameState.load_from_store(self.board, store)
        self._enumerator = None
        return stored_image_hash(store)
