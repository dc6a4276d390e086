"""
Random loop generation by growing a region of cells.

The boundary between a simply connected region of cells and the rest of the
board (outside included) is a single simple loop, because every vertex of a
hexagonal grid joins at most three lines. The generator grows such a region
one random cell at a time, accepting a cell only when doing so keeps the
region simply connected.
"""

import math
import random
from typing import List, Optional, Set

import numpy as np

from ..core.board import Board, Line
from ..core.state import LineState
from ..core.utils import setup_logger
from ..core.validator import trace_loop


def _arc_count(inside: List[bool]) -> int:
    """Number of inside/outside transitions walking once around a cell"""
    return sum(1 for k in range(6) if inside[k] != inside[(k + 1) % 6])


class RandomLoopGenerator:
    """
    Region-growing walk over the cell adjacency graph.

    Holds its own cursor (region, frontier worklist and exclusion set) and
    its own ``random.Random`` stream, so ``step`` can be called one cell at
    a time and the walk restarted with ``reset``.

    A frontier cell is accepted when its in-region neighbours form a single
    contiguous arc. A rejected cell goes into the exclusion set and is only
    queued again when one of its neighbours joins the region, so the number
    of examinations is bounded by six times the cell count.
    """

    def __init__(self, board: Board, seed: Optional[int] = None, fill_ratio: float = 0.5):
        if not 0 < fill_ratio <= 1:
            raise ValueError(f"fill_ratio must be in (0, 1]: {fill_ratio}")

        self.board = board
        self.seed = seed
        self.fill_ratio = fill_ratio
        self.target_size = max(1, math.ceil(fill_ratio * board.cell_count))
        self.logger = setup_logger(self.__class__.__name__)
        self.reset()

    def reset(self):
        """Restart the walk from scratch with the same seed"""
        self._rng = random.Random(self.seed)
        self.region: Set[int] = set()
        self.excluded: Set[int] = set()
        self._frontier: List[int] = []
        self._queued: Set[int] = set()
        self.examined = 0

        start = self._rng.randrange(self.board.cell_count)
        self._add(start)

    @property
    def done(self) -> bool:
        return len(self.region) >= self.target_size or not self._frontier

    def _queue(self, cell_id: int):
        if cell_id in self.region or cell_id in self._queued:
            return
        self.excluded.discard(cell_id)
        self._frontier.append(cell_id)
        self._queued.add(cell_id)

    def _add(self, cell_id: int):
        self.region.add(cell_id)
        for neighbor in self.board.cells[cell_id].neighbors:
            if neighbor is not None:
                self._queue(neighbor)

    def _pop_random(self) -> int:
        index = self._rng.randrange(len(self._frontier))
        frontier = self._frontier
        frontier[index], frontier[-1] = frontier[-1], frontier[index]
        cell_id = frontier.pop()
        self._queued.discard(cell_id)
        return cell_id

    def can_add(self, cell_id: int) -> bool:
        """True if adding the cell keeps the region simply connected"""
        inside = [n is not None and n in self.region for n in self.board.cells[cell_id].neighbors]
        return _arc_count(inside) == 2

    def step(self) -> Optional[int]:
        """
        Grow the region by one cell.

        Returns:
            The id of the cell added, or None once the walk has ended
        """
        while not self.done:
            cell_id = self._pop_random()
            self.examined += 1
            if self.can_add(cell_id):
                self._add(cell_id)
                return cell_id
            self.excluded.add(cell_id)
        return None

    def run(self) -> Set[int]:
        """Grow until the target size is reached or no candidate is left"""
        while self.step() is not None:
            pass
        return self.region

    def boundary_lines(self) -> List[int]:
        """Lines with the region on exactly one side"""
        boundary = []
        for line in self.board.lines:
            left, right = (c is not None and c in self.region for c in line.cells)
            if left != right:
                boundary.append(line.id)
        return boundary

    def loop(self) -> List[int]:
        """
        Boundary lines in traversal order.

        Returns an empty list (and logs a warning) when the boundary does not
        form a single closed loop.
        """
        boundary = self.boundary_lines()
        if not boundary:
            self.logger.warning("Region has no boundary; no loop to extract")
            return []

        states = np.full(self.board.line_count, LineState.EMPTY, dtype=np.int8)
        states[boundary] = LineState.FILLED
        ordered = trace_loop(self.board, states)
        if ordered is None or len(ordered) != len(boundary):
            self.logger.warning(
                f"Region boundary of {len(boundary)} lines is not a single loop (seed={self.seed})"
            )
            return []
        return ordered


def generate_random_solution(board: Board, seed: Optional[int] = None,
                             fill_ratio: float = 0.5) -> List[Line]:
    """
    Produce one random simple loop on the board.

    Args:
        board: Board structure
        seed: Optional seed; the same seed always yields the same loop
        fill_ratio: Share of cells to enclose

    Returns:
        Lines of the loop in traversal order, or an empty list on failure
    """
    generator = RandomLoopGenerator(board, seed=seed, fill_ratio=fill_ratio)
    generator.run()
    return [board.lines[line_id] for line_id in generator.loop()]
