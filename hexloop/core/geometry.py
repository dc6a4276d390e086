"""
Closed-form geometry and index math for hexagonal boards.

Cells are addressed in two systems:

* cardinal: a single integer index into the rectangular ``W x H`` grid
* axial: ``(col, row)`` coordinates in that same grid

The grid carries one padding column on each side of the hexagon so that
every neighbour offset of an on-board cell stays inside the rectangle.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple, Union

Coord = Tuple[float, float]

# 30 and 60 degrees in radians
DEG30 = math.pi / 6
DEG60 = math.pi / 3
SIN60 = math.sin(DEG60)
COS60 = math.cos(DEG60)

# Relative (dcol, drow) of each neighbour position, clockwise from west
NEIGHBOR_OFFSETS: List[Tuple[int, int]] = [
    (-1, 0),   # 0: west
    (0, -1),   # 1: north-west
    (1, -1),   # 2: north-east
    (1, 0),    # 3: east
    (0, 1),    # 4: south-east
    (-1, 1),   # 5: south-west
]

# Distance from cell centre to each corner, for unit spacing between centres
VERTEX_RADIUS = 1 / (2 * math.cos(DEG30))

# Corner offsets clockwise from the upper-left corner (v axis points down)
VERTEX_OFFSETS: List[Coord] = [
    (VERTEX_RADIUS * math.cos(k * DEG60), VERTEX_RADIUS * math.sin(k * DEG60))
    for k in (-2.5, -1.5, -0.5, 0.5, 1.5, 2.5)
]


def opposite(position: int) -> int:
    """Position index on the far side of a cell."""
    return (position + 3) % 6


def check_radius(R: int) -> int:
    """Reject radii that cannot describe a board."""
    if isinstance(R, bool) or not isinstance(R, int):
        raise ValueError(f"Board radius must be an integer, got {R!r}")
    if R < 0:
        raise ValueError(f"Board radius must be non-negative: {R}")
    return R


def cell_count(R: int) -> int:
    """Number of cells on a board of radius ``R``: 3R^2 + 3R + 1."""
    check_radius(R)
    return (3 * R + 3) * R + 1


def line_count(R: int) -> int:
    """Number of lines on a board of radius ``R``: 9R^2 + 15R + 6."""
    check_radius(R)
    return (9 * R + 15) * R + 6


def vert_count(R: int) -> int:
    """Number of vertices on a board of radius ``R``: 6R^2 + 12R + 6."""
    check_radius(R)
    return (6 * R + 12) * R + 6


@dataclass(frozen=True)
class BoardDimensions:
    """Derived constants of a board, all pure functions of the radius."""
    R: int
    D: int  # diameter, corner to corner in cells
    S: int  # span, cells across any diagonal
    W: int  # grid width including padding columns
    H: int  # grid height
    G: int  # size of the rectangular index space
    C: int
    L: int
    V: int

    @classmethod
    def for_radius(cls, R: int) -> 'BoardDimensions':
        check_radius(R)
        span = 2 * R + 1
        width = span + 2
        return cls(
            R=R,
            D=2 * R,
            S=span,
            W=width,
            H=span,
            G=width * span,
            C=cell_count(R),
            L=line_count(R),
            V=vert_count(R),
        )


def grid_width(R: int) -> int:
    return 2 * check_radius(R) + 3


def grid_height(R: int) -> int:
    return 2 * check_radius(R) + 1


def cardinal_to_axial(R: int, index: int) -> Tuple[int, int]:
    """
    Convert a cardinal index to axial ``(col, row)``.

    Args:
        R: Board radius
        index: Index in ``[0, W*H)``

    Returns:
        Tuple of (col, row)
    """
    width = grid_width(R)
    if not 0 <= index < width * grid_height(R):
        raise ValueError(f"Cardinal index {index} outside grid for radius {R}")
    return index % width, index // width


def axial_to_cardinal(R: int, col: int, row: int) -> int:
    """Convert axial ``(col, row)`` to a cardinal index."""
    width = grid_width(R)
    if not (0 <= col < width and 0 <= row < grid_height(R)):
        raise ValueError(f"Axial coordinate ({col}, {row}) outside grid for radius {R}")
    return row * width + col


def coord_is_valid(R: int, col: int, row: int) -> bool:
    """True iff ``(col, row)`` lies within the hexagonal footprint."""
    check_radius(R)
    span = 2 * R + 1
    if col < 1 or row < 0 or col > span or row >= span:
        return False
    return R + 1 - col <= row <= 3 * R + 1 - col


def is_on_board(R: int, col_or_index: int, row: Union[int, None] = None) -> bool:
    """
    Check whether a grid position holds a real cell.

    Accepts either axial ``(col, row)`` or a single cardinal index. Positions
    outside the rectangular grid are simply off the board.
    """
    if row is not None:
        return coord_is_valid(R, col_or_index, row)

    width = grid_width(R)
    if not 0 <= col_or_index < width * grid_height(R):
        return False
    return coord_is_valid(R, col_or_index % width, col_or_index // width)


def to_nominal(R: int, col: float, row: float) -> Coord:
    """Axial grid position to real-plane ``(u, v)``, board centre at origin."""
    di = col - 1 - R
    dj = row - R
    return di + dj * COS60, dj * SIN60


def from_nominal(R: int, u: float, v: float) -> Coord:
    """Real-plane ``(u, v)`` to fractional axial ``(col, row)``."""
    dj = v / SIN60
    di = u - dj * COS60
    return di + 1 + R, dj + R


def nearest_axial(R: int, u: float, v: float) -> Tuple[int, int]:
    """
    Axial coordinate of the cell whose hexagon contains ``(u, v)``.

    Rounds in cube coordinates so points near a corner resolve to the
    closest centre rather than the closest row.
    """
    col, row = from_nominal(R, u, v)
    x = col - 1 - R
    z = row - R
    y = -x - z

    rx, ry, rz = round(x), round(y), round(z)
    dx, dy, dz = abs(rx - x), abs(ry - y), abs(rz - z)
    if dx > dy and dx > dz:
        rx = -ry - rz
    elif dy <= dz:
        rz = -rx - ry

    return int(rx) + 1 + R, int(rz) + R
