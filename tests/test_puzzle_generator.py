"""
Puzzle generation tests:
- Generated clues agree with the generated loop
- The player's lines start undecided
- Seeds and uniqueness checking
"""

import pytest

from hexloop.core.state import LineState, code_to_line_states
from hexloop.core.validator import is_winning
from hexloop.generators import PuzzleGenerator, PuzzleGeneratorConfig


@pytest.mark.parametrize("R", [0, 1, 2, 4])
def test_generated_puzzle_is_consistent(R, boards):
    board = boards[R]
    state = PuzzleGenerator(PuzzleGeneratorConfig(random_seed=17)).generate(board)

    assert state is not None
    assert state.has_solution()
    assert all(state.lines == LineState.DEFAULT)
    assert is_winning(board, state.solution, state.clues)
    for cell_id, count in state.clues.items():
        assert count == state.filled_count(cell_id, state.solution)


def test_clue_ratio(boards):
    board = boards[3]
    config = PuzzleGeneratorConfig(random_seed=1, clue_ratio=0.5)
    state = PuzzleGenerator(config).generate(board)
    assert len(state.clues) == round(0.5 * board.cell_count)


def test_single_cell_board_always_clued(board0):
    state = PuzzleGenerator(PuzzleGeneratorConfig(random_seed=4, clue_ratio=0)).generate(board0)
    assert state.clues == {0: 6}


def test_seeded_generation_is_reproducible(boards):
    board = boards[3]
    a = PuzzleGenerator(PuzzleGeneratorConfig(random_seed=123)).generate(board)
    b = PuzzleGenerator(PuzzleGeneratorConfig(random_seed=123)).generate(board)
    assert list(a.solution) == list(b.solution)
    assert a.clues == b.clues


def test_verify_unique_on_tiny_board(board0):
    config = PuzzleGeneratorConfig(random_seed=9, verify_unique=True)
    state = PuzzleGenerator(config).generate(board0)
    assert state is not None
    assert list(state.solution) == list(code_to_line_states(0b111111, 6))


@pytest.mark.parametrize("kwargs", [
    {'clue_ratio': 1.5},
    {'clue_ratio': -0.1},
    {'max_attempts': 0},
])
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        PuzzleGeneratorConfig(**kwargs)
