"""Builders for hand-made target lists."""

from typing import Optional

from spriteorder.state import GroupDescriptor, Sprite, Target


def make_sprite(target_id: str, group_id: Optional[str] = None, rank: int = 0) -> Target:
    group = None
    if group_id is not None:
        group = GroupDescriptor(
            group_id=group_id,
            group_name=f"{group_id[:-1]} group",
            index_in_group=rank,
        )
    return Target(id=target_id, name=target_id, sprite=Sprite(name=target_id, group=group))


def make_stage() -> Target:
    return Target(id="stage", name="Stage", is_stage=True)


def make_clone(original: Target, clone_id: str) -> Target:
    return Target(id=clone_id, name=original.name, sprite=original.sprite, is_original=False)
