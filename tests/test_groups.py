from __future__ import annotations

import pytest

from spriteorder import AlreadyGrouped, NotASprite, NotFound
from spriteorder.ops import (
    create_group, group_members, join_group, rename_group, set_group_edit,
    set_group_open,
)
from spriteorder.ops.groups import group_ids, is_grouped, same_group
from spriteorder.undo import capture_state
from tests.helpers import make_clone


def test_create_then_join(build, describe, changes) -> None:
    state = build("A", "B", "C")
    calls = changes(state)

    desc = create_group(state, "B", 0)
    join_group(state, "C", "B")

    assert desc.group_id == "Bg"
    assert desc.group_name == "B group"
    assert desc.is_open and not desc.is_edit
    assert describe(state) == [
        ("stage", None, None),
        ("A", None, None),
        ("B", "Bg", 0),
        ("C", "Bg", 1),
    ]
    assert calls == [1, 1]


def test_create_group_keeps_order_field(build) -> None:
    state = build("A")

    assert create_group(state, "A", order=4).order == 4


def test_create_group_uses_name_template(build) -> None:
    state = build("A")
    state.settings.group_name_template = "Team {name}"

    assert create_group(state, "A").group_name == "Team A"


def test_create_group_on_grouped_sprite_changes_nothing(build, changes) -> None:
    state = build(("X", "Y"), "A")
    before = capture_state(state)
    calls = changes(state)

    with pytest.raises(AlreadyGrouped):
        create_group(state, "Y")

    assert capture_state(state) == before
    assert calls == []
    assert not state.history.can_undo()


def test_create_group_rejects_stage_and_unknown_ids(build) -> None:
    state = build("A")

    with pytest.raises(NotASprite):
        create_group(state, "stage")
    with pytest.raises(NotFound):
        create_group(state, "nope")


def test_clone_cannot_be_grouped(build) -> None:
    state = build("A")
    state.load_targets(state.sequence.to_list() + [make_clone(state.get_target_by_id("A"), "A2")])

    with pytest.raises(NotFound):
        create_group(state, "A2")


class TestGroupMetadata:

    def test_rename_updates_every_member(self, build, changes) -> None:
        state = build(("X", "Y", "W"), "A")
        calls = changes(state)

        rename_group(state, "Enemies", "Xg")

        assert {t.group.group_name for t in group_members(state, "Xg")} == {"Enemies"}
        assert calls == [1]

    def test_rename_to_same_name_is_a_no_op(self, build, changes) -> None:
        state = build(("X", "Y"))
        calls = changes(state)

        rename_group(state, "X group", "Xg")

        assert calls == []

    def test_toggle_open_and_edit(self, build) -> None:
        state = build(("X", "Y"))

        set_group_open(state, False, "Xg")
        set_group_edit(state, True, "Xg")

        for t in group_members(state, "Xg"):
            assert t.group.is_open is False
            assert t.group.is_edit is True

    def test_unknown_group(self, build) -> None:
        state = build(("X", "Y"))

        with pytest.raises(NotFound):
            rename_group(state, "name", "Qg")
        with pytest.raises(NotFound):
            set_group_open(state, True, "Qg")


def test_predicates(build) -> None:
    state = build(("X", "Y"), "A", ("Z", "W"))
    x, y, a, z = (state.get_target_by_id(i) for i in "XYAZ")

    assert is_grouped(x) and not is_grouped(a)
    assert same_group(x, y)
    assert not same_group(x, z)
    assert not same_group(a, a)
    assert group_ids(state) == ["Xg", "Zg"]
    assert [t.id for t in group_members(state, "Zg")] == ["Z", "W"]
