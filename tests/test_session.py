"""
Game session tests:
- Radius changes rebuild board and state
- Line actions and win checks
- Resumable enumeration and store snapshots
"""

import pytest

from hexloop.core.state import LineState, image_hash
from hexloop.generators import PuzzleGeneratorConfig
from hexloop.session import GameSession


def test_default_session():
    session = GameSession()
    assert session.radius == 0
    assert session.board.cell_count == 1
    assert all(session.state.lines == LineState.DEFAULT)


def test_set_radius_rebuilds():
    session = GameSession()
    session.line_action(0, 'fill')
    assert session.set_radius(2)
    assert session.board.line_count == 72
    assert all(session.state.lines == LineState.DEFAULT)
    assert not session.set_radius(2)
    with pytest.raises(ValueError):
        session.set_radius(-1)


def test_line_actions():
    session = GameSession()
    assert session.line_action(2, 'toggle')
    assert session.state.get_line(2) == LineState.FILLED
    assert session.line_action(2, 'empty')
    assert session.line_action(2, 'unset')
    assert not session.line_action(2, 'unset')
    with pytest.raises(ValueError):
        session.line_action(2, 'paint')


def test_solve_single_cell_by_hand():
    session = GameSession()
    for line_id in range(5):
        session.line_action(line_id, 'fill')
    assert not session.is_solved()
    assert not session.check()

    session.line_action(5, 'fill')
    assert session.is_solved()
    assert session.check()


def test_cell_at_point():
    session = GameSession(radius=2)
    centre = session.cell_at_point(0.0, 0.0)
    assert centre.coord == (3, 2)
    assert session.cell_at_point(50.0, 0.0) is None


def test_new_puzzle():
    session = GameSession(radius=2, generator_config=PuzzleGeneratorConfig(random_seed=3))
    assert session.new_puzzle()
    assert session.state.has_solution()
    assert session.state.clues
    assert not session.is_solved()

    session.state.load_lines(session.state.solution)
    assert session.is_solved()


def test_enumerator_resumes_across_calls():
    session = GameSession()
    enum = session.enumerator(chunk_size=10)
    enum.run(state_budget=30)
    assert session.enumerator() is enum
    enum.run()
    assert enum.finished
    assert enum.states_visited == 64
    assert enum.solutions == {0b111111}

    session.set_radius(1)
    assert session.enumerator() is not enum


def test_enumerator_chunk_size_change_keeps_cursor():
    session = GameSession()
    enum = session.enumerator(chunk_size=10)
    enum.run(state_budget=20)

    assert session.enumerator(chunk_size=16) is enum
    assert enum.chunk_size == 16
    assert enum.cursor == 20

    enum.run_chunk()
    assert enum.cursor == 36

    assert session.enumerator().chunk_size == 16
    with pytest.raises(ValueError):
        session.enumerator(chunk_size=0)


def test_snapshot_restore():
    session = GameSession(radius=2, generator_config=PuzzleGeneratorConfig(random_seed=5))
    session.new_puzzle()
    session.line_action(4, 'fill')
    digest = image_hash(b"png bytes")

    store = {}
    session.snapshot(store, digest)

    other = GameSession()
    assert other.restore(store) == digest
    assert other.radius == 2
    assert list(other.state.lines) == list(session.state.lines)
    assert list(other.state.solution) == list(session.state.solution)
    assert other.state.clues == session.state.clues
