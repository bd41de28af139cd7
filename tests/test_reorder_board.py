"""Local drag-and-drop reordering state machine."""

import uuid

import pytest

from app.dashboard.reorder import BoardRow, BoardState, EmptyPlanError, ReorderBoard


def rows(*titles: str) -> list[BoardRow]:
    return [BoardRow(id=str(uuid.uuid4()), order=i, title=t) for i, t in enumerate(titles, start=1)]


def titles(board: ReorderBoard) -> list[str]:
    return [row.title for row in board.rows]


def orders(board: ReorderBoard) -> list[int]:
    return [row.order for row in board.rows]


@pytest.fixture
def board():
    b = ReorderBoard()
    b.load(rows("x", "y", "z"))
    return b


def test_load_sorts_by_order():
    board = ReorderBoard()
    x, y, z = rows("x", "y", "z")
    board.load([z, x, y])
    assert titles(board) == ["x", "y", "z"]
    assert board.state == BoardState.IDLE


def test_drag_first_row_onto_last(board):
    x, _, z = board.rows

    assert board.drag_start(x.id)
    assert board.state == BoardState.DRAGGING
    assert board.drag_over(z.id)
    assert board.drop(z.id)

    assert titles(board) == ["y", "z", "x"]
    assert orders(board) == [1, 2, 3]
    assert board.state == BoardState.PENDING_COMMIT
    assert board.source_id is None


def test_drag_last_row_onto_first(board):
    _, _, z = board.rows
    x = board.rows[0]

    board.drag_start(z.id)
    board.drop(x.id)

    assert titles(board) == ["z", "x", "y"]
    assert orders(board) == [1, 2, 3]


def test_drop_on_itself_changes_nothing(board):
    before = list(board.rows)
    y = board.rows[1]

    board.drag_start(y.id)
    assert not board.drag_over(y.id)
    assert not board.drop(y.id)

    assert board.rows == before
    assert board.state == BoardState.IDLE


def test_drop_on_itself_keeps_pending_state(board):
    x, y, z = board.rows
    board.drag_start(x.id)
    board.drop(z.id)
    arranged = list(board.rows)

    board.drag_start(y.id)
    board.drop(y.id)

    assert board.rows == arranged
    assert board.state == BoardState.PENDING_COMMIT


def test_drag_end_without_drop(board):
    x = board.rows[0]
    board.drag_start(x.id)
    board.drag_end()

    assert board.source_id is None
    assert board.state == BoardState.IDLE
    assert titles(board) == ["x", "y", "z"]


def test_drop_without_drag_is_ignored(board):
    assert not board.drop(board.rows[2].id)
    assert board.state == BoardState.IDLE


def test_plan_skips_unsaved_rows():
    board = ReorderBoard()
    saved = rows("a", "b")
    board.load(saved + [BoardRow(id="local-1", order=3, title="draft")])

    board.drag_start("local-1")
    board.drop(saved[0].id)

    assert titles(board) == ["draft", "a", "b"]
    assert [(e.id, e.order) for e in board.plan()] == [(saved[0].id, 2), (saved[1].id, 3)]


def test_empty_plan_leaves_state_untouched():
    board = ReorderBoard()
    board.load([BoardRow(id="local-1", order=1), BoardRow(id="local-2", order=2)])
    board.drag_start("local-2")
    board.drop("local-1")

    with pytest.raises(EmptyPlanError):
        board.begin_commit()
    assert board.state == BoardState.PENDING_COMMIT


def test_commit_cycle(board):
    x, _, z = board.rows
    board.drag_start(x.id)
    board.drop(z.id)

    entries = board.begin_commit()
    assert board.state == BoardState.COMMITTING
    assert [e.order for e in entries] == [1, 2, 3]
    assert not board.drag_start(x.id)

    board.commit_failed()
    assert board.state == BoardState.PENDING_COMMIT
    assert titles(board) == ["y", "z", "x"]

    board.begin_commit()
    board.commit_succeeded(list(board.rows))
    assert board.state == BoardState.IDLE
    assert board.canonical == board.rows


def test_discard_restores_canonical(board):
    x, _, z = board.rows
    board.drag_start(x.id)
    board.drop(z.id)

    board.discard()

    assert titles(board) == ["x", "y", "z"]
    assert board.state == BoardState.IDLE
