"""
Board structure for hexagonal loop puzzles.

A board is an arena of three flat tables (cells, lines, vertices) indexed by
dense integer ids. All cross references are plain ids, so the structure has
no object cycles and serializes trivially. Line state lives elsewhere (see
``hexloop.core.state``).
"""

import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import networkx as nx

from .geometry import (
    BoardDimensions, Coord, NEIGHBOR_OFFSETS, VERTEX_OFFSETS,
    check_radius, is_on_board, nearest_axial, opposite, to_nominal
)


@dataclass
class Vertex:
    """Junction of two (board edge) or three (interior) lines"""
    id: int
    nom: Coord
    lines: List[int] = field(default_factory=list)

    def __repr__(self):
        return f"Vertex({self.id}, lines={self.lines})"


@dataclass
class Line:
    """
    Edge between two vertices.

    ``cells`` holds ``[left, right]`` as seen walking from ``start`` to
    ``end``; ``None`` marks the outside of the board.
    """
    id: int
    verts: Tuple[int, int]
    cells: List[Optional[int]] = field(default_factory=lambda: [None, None])

    @property
    def start(self) -> int:
        return self.verts[0]

    @property
    def end(self) -> int:
        return self.verts[1]

    @property
    def is_boundary(self) -> bool:
        return self.cells[0] is None or self.cells[1] is None

    def __repr__(self):
        return f"Line({self.id}, {self.verts[0]}->{self.verts[1]}, cells={self.cells})"


@dataclass
class Cell:
    """
    Hexagonal cell.

    ``lines`` and ``neighbors`` are indexed clockwise from west, ``verts``
    clockwise from the upper-left corner; line ``k`` joins vertices ``k-1``
    and ``k``, and ``neighbors[k]`` is the cell across line ``k``.
    """
    id: int
    coord: Tuple[int, int]
    nom: Coord
    lines: List[Optional[int]] = field(default_factory=lambda: [None] * 6)
    verts: List[Optional[int]] = field(default_factory=lambda: [None] * 6)
    neighbors: List[Optional[int]] = field(default_factory=lambda: [None] * 6)

    def __repr__(self):
        return f"Cell({self.id}, coord={self.coord})"


class Board:
    """Immutable board structure for a single radius"""

    def __init__(self, R: int, cells: List[Cell], lines: List[Line],
                 verts: List[Vertex], grid: Dict[Tuple[int, int], int]):
        self.R = R
        self.dims = BoardDimensions.for_radius(R)
        self.cells = cells
        self.lines = lines
        self.verts = verts
        self._grid = grid

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def vert_count(self) -> int:
        return len(self.verts)

    def cell_at_axial(self, col: int, row: int) -> Optional[Cell]:
        """Cell at a grid position, or None when off the board"""
        cid = self._grid.get((col, row))
        return None if cid is None else self.cells[cid]

    def cell_at_point(self, u: float, v: float) -> Optional[Cell]:
        """Cell whose hexagon contains the real-plane point ``(u, v)``"""
        return self.cell_at_axial(*nearest_axial(self.R, u, v))

    def other_vertex(self, line_id: int, vert_id: int) -> int:
        """Vertex at the far end of a line"""
        start, end = self.lines[line_id].verts
        if vert_id == start:
            return end
        if vert_id == end:
            return start
        raise ValueError(f"Vertex {vert_id} is not an end of line {line_id}")

    def cell_adjacency_graph(self) -> nx.Graph:
        """Cell adjacency as a networkx graph; edges carry the shared line id"""
        graph = nx.Graph()
        graph.add_nodes_from(cell.id for cell in self.cells)
        for line in self.lines:
            left, right = line.cells
            if left is not None and right is not None:
                graph.add_edge(left, right, line=line.id)
        return graph

    def summary(self) -> dict:
        return {
            'radius': self.R,
            'cells': self.cell_count,
            'lines': self.line_count,
            'vertices': self.vert_count,
            'boundary_lines': sum(1 for line in self.lines if line.is_boundary),
        }

    def __repr__(self):
        return f"Board(R={self.R}, cells={self.cell_count}, lines={self.line_count}, verts={self.vert_count})"


def build_board(R: int) -> Board:
    """
    Build the full cell/line/vertex structure for a board of radius ``R``.

    Cells are visited row by row, left to right. For each new cell the
    previously visited neighbours (west, north-west, north-east) already own
    the shared lines and corners, which are reused; everything else is
    allocated fresh. Changing the visiting order breaks this sharing rule.

    Args:
        R: Board radius (>= 0)

    Returns:
        The constructed board
    """
    check_radius(R)
    dims = BoardDimensions.for_radius(R)

    cells: List[Cell] = []
    lines: List[Line] = []
    verts: List[Vertex] = []
    grid: Dict[Tuple[int, int], int] = {}

    def new_vert(nom: Coord, offset: int) -> int:
        vert = Vertex(len(verts), (nom[0] + VERTEX_OFFSETS[offset][0],
                                   nom[1] + VERTEX_OFFSETS[offset][1]))
        verts.append(vert)
        return vert.id

    def new_line(start: int, end: int, cell: Cell, side: int) -> int:
        line = Line(len(lines), (start, end))
        line.cells[side] = cell.id
        lines.append(line)
        verts[start].lines.append(line.id)
        verts[end].lines.append(line.id)
        return line.id

    def neighbor_at(col: int, row: int, position: int) -> Optional[Cell]:
        dc, dr = NEIGHBOR_OFFSETS[position]
        cid = grid.get((col + dc, row + dr))
        return None if cid is None else cells[cid]

    def link(cell: Cell, other: Cell, position: int):
        # Adopt the neighbour's line on this side and register as its right-hand cell
        back = opposite(position)
        cell.neighbors[position] = other.id
        other.neighbors[back] = cell.id
        cell.lines[position] = other.lines[back]
        lines[cell.lines[position]].cells[1] = cell.id

    for row in range(dims.H):
        for col in range(dims.W):
            if not is_on_board(R, col, row):
                continue

            nom = to_nominal(R, col, row)
            cell = Cell(len(cells), (col, row), nom)
            cells.append(cell)
            grid[(col, row)] = cell.id

            west = neighbor_at(col, row, 0)
            north_west = neighbor_at(col, row, 1)
            north_east = neighbor_at(col, row, 2)

            if north_west:
                link(cell, north_west, 1)
                cell.verts[0] = north_west.verts[4]
                cell.verts[1] = north_west.verts[3]
            else:
                cell.verts[0] = west.verts[2] if west else new_vert(nom, 0)
                cell.verts[1] = north_east.verts[5] if north_east else new_vert(nom, 1)

            if north_east:
                link(cell, north_east, 2)
                cell.verts[2] = north_east.verts[4]
            else:
                cell.verts[2] = new_vert(nom, 2)

            if west:
                link(cell, west, 0)
                cell.verts[5] = west.verts[3]
            else:
                cell.verts[5] = new_vert(nom, 5)

            cell.verts[4] = new_vert(nom, 4)
            cell.verts[3] = new_vert(nom, 3)

            v = cell.verts
            if cell.lines[0] is None:
                cell.lines[0] = new_line(v[5], v[0], cell, 1)
            if cell.lines[1] is None:
                cell.lines[1] = new_line(v[0], v[1], cell, 1)
            if cell.lines[2] is None:
                cell.lines[2] = new_line(v[1], v[2], cell, 1)

            cell.lines[3] = new_line(v[3], v[2], cell, 0)
            cell.lines[5] = new_line(v[5], v[4], cell, 0)
            cell.lines[4] = new_line(v[4], v[3], cell, 0)

    return Board(R, cells, lines, verts, grid)


class CellShuffle:
    """
    Restartable iterator over cell ids in random order.

    Lazy Fisher-Yates: each step swaps a random remaining id into the cursor
    position. The board itself is never touched, so reshuffling cannot move
    ids or adjacency.
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        self.board = board
        self.seed = seed
        self.reset()

    def reset(self):
        """Restart from the beginning with the same seed"""
        self._rng = random.Random(self.seed)
        self._order = list(range(self.board.cell_count))
        self._cursor = 0

    @property
    def remaining(self) -> int:
        return len(self._order) - self._cursor

    def next_cell(self) -> Optional[int]:
        """Produce the next cell id, or None once every cell has been produced"""
        if self._cursor >= len(self._order):
            return None
        pick = self._rng.randrange(self._cursor, len(self._order))
        order = self._order
        order[self._cursor], order[pick] = order[pick], order[self._cursor]
        self._cursor += 1
        return order[self._cursor - 1]

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        cid = self.next_cell()
        if cid is None:
            raise StopIteration
        return cid
