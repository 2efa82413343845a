from __future__ import annotations

from spriteorder.ops import create_group, move_to_front, redo, undo
from spriteorder.undo import UndoStack


def test_undo_and_redo_a_move(build, changes) -> None:
    state = build("A", "B", "C")
    move_to_front(state, "C")
    calls = changes(state)

    assert undo(state) is True
    assert state.sequence.ids() == ["stage", "A", "B", "C"]

    assert redo(state) is True
    assert state.sequence.ids() == ["stage", "C", "A", "B"]
    assert calls == [1, 1]


def test_undo_restores_group_descriptors(build) -> None:
    state = build("A", "B")
    create_group(state, "B")

    undo(state)

    assert state.get_target_by_id("B").group is None

    redo(state)

    assert state.get_target_by_id("B").group.group_id == "Bg"


def test_nothing_to_undo_or_redo(build, changes) -> None:
    state = build("A")
    calls = changes(state)

    assert undo(state) is False
    assert redo(state) is False
    assert calls == []


def test_new_operation_drops_redo(build) -> None:
    state = build("A", "B", "C")
    move_to_front(state, "C")
    undo(state)

    move_to_front(state, "B")

    assert not state.history.can_redo()
    assert redo(state) is False
    assert state.sequence.ids() == ["stage", "B", "A", "C"]


def test_undo_stack_is_bounded() -> None:
    stack = UndoStack(max_size=3)
    for i in range(5):
        stack.push({"n": i})

    assert [s["n"] for s in stack.snapshots()] == [2, 3, 4]
    assert stack.undo() == {"n": 3}
    assert stack.undo() == {"n": 2}
    assert stack.undo() is None


def test_history_depth_comes_from_settings(build, settings) -> None:
    settings.undo_max_size = 2
    state = build("A", "B")

    move_to_front(state, "B")
    move_to_front(state, "A")
    move_to_front(state, "B")

    assert undo(state) is True
    assert undo(state) is False
    assert state.sequence.ids() == ["stage", "A", "B"]


def test_undo_stack_branches() -> None:
    stack = UndoStack(max_size=1)
    stack.push({"n": 0})
    stack.push({"n": 1})

    assert len(stack) == 1
    assert not stack.can_undo()

    stack = UndoStack()
    for i in range(3):
        stack.push({"n": i})
    stack.undo()
    stack.undo()

    assert stack.current == {"n": 0}
    assert [s["n"] for s in stack.snapshots()] == [0, 1, 2]
    assert stack.redo() == {"n": 1}

    stack.push({"n": 9})

    assert not stack.can_redo()
    assert [s["n"] for s in stack.snapshots()] == [0, 1, 9]
