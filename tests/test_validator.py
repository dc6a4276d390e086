"""
Loop validation tests:
- Single loops win, with and without clues
- Open paths, branches and second cycles lose
- Detailed validation reports
"""

import numpy as np
import pytest

from hexloop.core.state import LineState, init_state
from hexloop.core.validator import (
    LoopValidator, clues_satisfied, filled_line_graph, is_winning, trace_loop
)


def _ring(board, col, row):
    return list(board.cell_at_axial(col, row).lines)


def _merged_ring(board, a, b):
    """Boundary of two adjacent cells: both rings minus the shared line."""
    return sorted(set(board.cells[a].lines) ^ set(board.cells[b].lines))


def test_single_cell_ring_wins(board0, make_states):
    states = make_states(board0, range(6))
    assert is_winning(board0, states)
    assert sorted(trace_loop(board0, states)) == list(range(6))


def test_nothing_filled_loses(board0, make_states):
    states = make_states(board0, [])
    assert trace_loop(board0, states) is None
    assert not is_winning(board0, states)
    # Clue 0 is satisfied, but an empty board is never a win
    assert clues_satisfied(board0, states, {0: 0})
    assert not is_winning(board0, states, {0: 0})


def test_undecided_lines_do_not_count(board0):
    states = np.full(6, LineState.DEFAULT, dtype=np.int8)
    assert not is_winning(board0, states)


@pytest.mark.parametrize("count", [1, 2, 5])
def test_open_path_loses(board0, make_states, count):
    assert not is_winning(board0, make_states(board0, range(count)))


def test_trace_follows_shared_vertices(board2, make_states):
    ring = _ring(board2, 3, 2)
    loop = trace_loop(board2, make_states(board2, ring))
    assert loop[0] == min(ring)
    assert sorted(loop) == sorted(ring)
    for a, b in zip(loop, loop[1:] + loop[:1]):
        assert set(board2.lines[a].verts) & set(board2.lines[b].verts)


def test_two_cell_boundary_wins(board2, make_states):
    centre = board2.cell_at_axial(3, 2)
    east = centre.neighbors[3]
    lines = _merged_ring(board2, centre.id, east)
    assert len(lines) == 10
    states = make_states(board2, lines)
    assert is_winning(board2, states)
    assert len(trace_loop(board2, states)) == 10


def test_two_disjoint_cycles_lose(board2, make_states):
    lines = _ring(board2, 2, 2) + _ring(board2, 4, 2)
    states = make_states(board2, lines)

    # The walk closes on the first cycle alone
    loop = trace_loop(board2, states)
    assert loop is not None and len(loop) == 6
    assert not is_winning(board2, states)

    result = LoopValidator.validate(board2, _as_state(board2, states))
    assert not result
    assert any("2 filled components" in e for e in result.errors)


def test_branch_loses(board2, make_states):
    centre = board2.cell_at_axial(3, 2)
    ring = list(centre.lines)
    # A spoke leaving one of the ring's corners
    corner = board2.verts[centre.verts[0]]
    spoke = next(l for l in corner.lines if l not in ring)
    states = make_states(board2, ring + [spoke])
    assert not is_winning(board2, states)

    partial = LoopValidator.validate_partial(board2, _as_state(board2, states))
    assert any("branching" in e for e in partial.errors)


def test_clues_decide_the_win(board2, make_states):
    centre = board2.cell_at_axial(3, 2)
    states = make_states(board2, centre.lines)
    west = centre.neighbors[0]

    assert is_winning(board2, states, {centre.id: 6})
    assert is_winning(board2, states, {centre.id: 6, west: 1})
    assert not is_winning(board2, states, {centre.id: 5})
    assert not is_winning(board2, states, {west: 0})
    assert clues_satisfied(board2, states, {west: 1})


def test_length_mismatch_rejected(board2):
    with pytest.raises(ValueError):
        is_winning(board2, np.zeros(5, dtype=np.int8))


def test_filled_line_graph(board2, make_states):
    lines = _ring(board2, 2, 2) + _ring(board2, 4, 2)
    graph = filled_line_graph(board2, make_states(board2, lines))
    assert graph.number_of_edges() == 12
    assert all(degree == 2 for _, degree in graph.degree())


def _as_state(board, states):
    state = init_state(board)
    state.load_lines(states)
    return state


def test_validate_reports(board2, make_states):
    centre = board2.cell_at_axial(3, 2)
    state = _as_state(board2, make_states(board2, centre.lines))
    state.set_clue(centre.id, 6)
    result = LoopValidator.validate(board2, state)
    assert result
    assert sorted(result.loop) == sorted(centre.lines)

    state.set_clue(centre.id, 4)
    result = LoopValidator.validate(board2, state)
    assert not result
    assert any("clue is 4" in e for e in result.errors)

    empty = LoopValidator.validate(board2, init_state(board2))
    assert not empty
    assert "No filled lines" in empty.errors


def test_validate_partial_clue_bounds(board2):
    state = init_state(board2)
    cell = board2.cells[9]
    state.set_clue(cell.id, 2)
    for line_id in cell.lines[:3]:
        state.fill(line_id)
    assert any("exceeds" in e for e in LoopValidator.validate_partial(board2, state).errors)

    state.reset()
    for line_id in cell.lines[:5]:
        state.empty(line_id)
    assert any("cannot reach" in e for e in LoopValidator.validate_partial(board2, state).errors)

    state.reset()
    state.fill(cell.lines[0])
    partial = LoopValidator.validate_partial(board2, state)
    assert partial
    assert partial.warnings


def test_state_statistics(board2, make_states):
    centre = board2.cell_at_axial(3, 2)
    state = _as_state(board2, make_states(board2, centre.lines))
    stats = LoopValidator.get_state_statistics(board2, state)
    assert stats['filled'] == 6
    assert stats['empty'] == board2.line_count - 6
    assert stats['undecided'] == 0
    assert stats['filled_components'] == 1
    assert stats['is_winning']
