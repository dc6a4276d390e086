import os
import sys

import numpy as np
import pytest

# Add project root to sys.path (so tests can import hexloop.*)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(PROJECT_ROOT)

from hexloop.core.board import build_board
from hexloop.core.state import LineState, init_state


@pytest.fixture(scope="session")
def boards():
    """Boards of radius 0 through 4, built once per test session."""
    return {r: build_board(r) for r in range(5)}


@pytest.fixture
def board0(boards):
    return boards[0]


@pytest.fixture
def board2(boards):
    return boards[2]


@pytest.fixture
def state0(board0):
    return init_state(board0)


@pytest.fixture
def make_states():
    """Returns a function building an EMPTY line-state array with the given lines FILLED."""
    def _make(board, filled):
        states = np.full(board.line_count, LineState.EMPTY, dtype=np.int8)
        for line_id in filled:
            states[line_id] = LineState.FILLED
        return states
    return _make
