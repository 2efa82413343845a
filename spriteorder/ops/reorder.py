"""Single-sprite reorder operations: move, swap, join and leave groups.

Each operation validates its endpoints, mutates the sequence and the group
descriptors inside one transaction and returns True if anything changed.
Observers are notified once on commit; rejected operations raise a
ReorderError and leave everything untouched.
"""

from dataclasses import replace

from ..core.log import get_logger
from ..state import group_id_for
from .groups import group_members, is_leader, require_group, require_sprite, same_group
from .passes import close_gap, detach, is_solo, open_gap, reassign_leader
from .transaction import transaction

FRONT = 'front'
BACK = 'back'

log = get_logger(__name__)


def _split_group(seq, pos):
    """Group id whose run would be split by inserting at `pos`, else None."""
    before = next((seq[i] for i in range(pos - 1, -1, -1) if seq[i].is_original), None)
    after = next((seq[i] for i in range(pos, len(seq)) if seq[i].is_original), None)
    if before is None or after is None or not same_group(before, after):
        return None
    return before.group.group_id


def _snap_to_run_edge(state, pos, moving_up):
    gid = _split_group(state.sequence, pos)
    if gid is None:
        return pos
    members = group_members(state, gid)
    if moving_up:
        return state.sequence.position_of(members[0].id)
    return state.sequence.position_of(members[-1].id) + 1


def move_ungrouped(state, source_id, position):
    """Move one sprite to an absolute position (remove, then insert).

    A grouped sprite leaves its group first. Positions are clamped to the
    slots after the stage; a position inside another group's run snaps to
    the run's edge in the direction of travel. Moving a sprite to its own
    position changes nothing, grouped or not; use leave_group() to take a
    sprite out of its group in place.
    """
    with transaction(state, 'move_ungrouped') as txn:
        target = require_sprite(state, source_id)
        seq = state.sequence
        old = seq.position_of(target.id)
        new = min(max(int(position), state.front_position()), len(seq) - 1)
        if new == old:
            txn.changed = False
            return False

        seq.remove_at(old)
        detach(state, target)
        new = _snap_to_run_edge(state, new, moving_up=new < old)
        seq.insert_at(new, target)
    log.debug(f'[Reorder] moved {source_id!r} {old} -> {new}')
    return txn.changed


def move_to_front(state, source_id):
    """Move a sprite to the first slot after the stage."""
    return move_ungrouped(state, source_id, state.front_position())


def move_to_back(state, source_id):
    return move_ungrouped(state, source_id, len(state.sequence) - 1)


def _vacate(state, target):
    """Take `target` out of its slot.

    Returns the membership the slot keeps for whoever arrives there: a
    copy of a non-leader's descriptor. A leader's slot keeps nothing;
    leadership passes to the next member instead.
    """
    desc = target.group
    if desc is None:
        return None
    if not is_leader(desc):
        return replace(desc)
    survivors = [t for t in group_members(state, desc.group_id) if t is not target]
    if survivors:
        close_gap(survivors, 0)
        reassign_leader(survivors)
    return None


def _swap_within_group(state, a, b):
    members = group_members(state, a.group.group_id)
    a.group.index_in_group, b.group.index_in_group = b.group.index_in_group, a.group.index_in_group
    reassign_leader(members)


def swap_positions(state, id_a, id_b):
    """Exchange the slots of two sprites.

    Within one group the ranks are exchanged as well. Across groups a
    non-leader slot keeps its membership for the incoming sprite, while a
    leader slot hands leadership to the next member of its group; a sprite
    landing on a slot without membership ends up ungrouped, unless it leads
    a group of its own with no other members.
    """
    with transaction(state, 'swap_positions') as txn:
        a = require_sprite(state, id_a)
        b = require_sprite(state, id_b)
        if a is b:
            txn.changed = False
            return False

        if same_group(a, b):
            _swap_within_group(state, a, b)
        else:
            solo_a, solo_b = is_solo(state, a), is_solo(state, b)
            slot_a = _vacate(state, a)
            slot_b = _vacate(state, b)
            a.sprite.group = slot_b or (a.sprite.group if solo_a else None)
            b.sprite.group = slot_a or (b.sprite.group if solo_b else None)

        seq = state.sequence
        seq.swap(seq.position_of(a.id), seq.position_of(b.id))
    return txn.changed


def join_group(state, dragged_id, after_target_id):
    """Drop a sprite directly after another one and join that sprite's group.

    The passes run in a fixed order: close the gap the sprite leaves in its
    old group, hand over that group's leadership if the leader left, then
    open a gap after the anchor. If the anchor is ungrouped the sprite just
    leaves its group and lands after the anchor.
    """
    with transaction(state, 'join_group') as txn:
        dragged = require_sprite(state, dragged_id)
        anchor = require_sprite(state, after_target_id)
        if dragged is anchor:
            txn.changed = False
            return False

        seq = state.sequence
        seq.remove_at(seq.position_of(dragged.id))
        detach(state, dragged)

        # The anchor's rank and group id are read after detach, which may
        # have renumbered or renamed them.
        if anchor.group is not None:
            rank = anchor.group.index_in_group + 1
            open_gap(group_members(state, anchor.group.group_id), rank)
            dragged.sprite.group = replace(anchor.group, index_in_group=rank)
        seq.insert_at(seq.position_of(anchor.id) + 1, dragged)
    return txn.changed


def join_group_at_head(state, dragged_id, group_id):
    """Drop a sprite on a group's header: it becomes the group's new leader.

    Also covers promoting a member of the same group.
    """
    with transaction(state, 'join_group_at_head') as txn:
        dragged = require_sprite(state, dragged_id)
        require_group(state, group_id)
        if dragged.group is not None and dragged.group.group_id == group_id and is_leader(dragged.group):
            txn.changed = False
            return False

        seq = state.sequence
        seq.remove_at(seq.position_of(dragged.id))
        detach(state, dragged)

        members = group_members(state, group_id)
        head = members[0]
        open_gap(members, 0)
        gid = group_id_for(dragged.id)
        dragged.sprite.group = replace(head.group, group_id=gid, index_in_group=0)
        for m in members:
            m.group.group_id = gid
        seq.insert_at(seq.position_of(head.id), dragged)
    return txn.changed


def leave_group(state, target_id):
    """Take a sprite out of its group, placing it right after the group."""
    with transaction(state, 'leave_group') as txn:
        target = require_sprite(state, target_id)
        if target.group is None:
            txn.changed = False
            return False

        seq = state.sequence
        old = seq.position_of(target.id)
        survivors = [m for m in group_members(state, target.group.group_id) if m is not target]
        seq.remove_at(old)
        detach(state, target)
        if survivors:
            seq.insert_at(seq.position_of(survivors[-1].id) + 1, target)
        else:
            seq.insert_at(old, target)
    return txn.changed
