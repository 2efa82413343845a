"""Whole-group operations: dropping a group onto another run, and moving a
group to either end of the sprite list.

A "run" is the contiguous block a gesture picks up or drops on: all
members of a group, or a single ungrouped sprite.
"""

from ..core.log import get_logger
from ..errors import NotASprite, NotFound
from .groups import group_members
from .reorder import BACK, FRONT
from .transaction import transaction

log = get_logger(__name__)

# Stands in for the missing tail of the shorter run while interleaving
PLACEHOLDER = object()


def resolve_run(state, ref):
    """Members of the run named by `ref`, in sequence order.

    `ref` is a group id, or a target id: an ungrouped sprite is a run of
    one, a grouped sprite stands for its whole group.
    """
    members = group_members(state, ref)
    if members:
        return members
    target = state.get_target_by_id(ref)
    if target is None or not target.is_original:
        raise NotFound(f'No group or sprite with id {ref!r}')
    if target.is_stage:
        raise NotASprite(f'{ref!r} is the stage')
    if target.group is not None:
        return group_members(state, target.group.group_id)
    return [target]


def interleave(items, drop_positions, drag_positions):
    """Swap two runs position-for-position and return the new list.

    The shorter run is padded with placeholders after its tail so the
    surplus tail of the longer run moves into the room the shorter one
    leaves; the placeholders are dropped afterwards.
    """
    items = list(items)
    drop, drag = list(drop_positions), list(drag_positions)
    num = abs(len(drop) - len(drag))
    if num:
        shorter, longer = (drop, drag) if len(drop) < len(drag) else (drag, drop)
        insert_at = shorter[-1] + 1
        items[insert_at:insert_at] = [PLACEHOLDER] * num
        shorter.extend(range(insert_at, insert_at + num))
        # Runs are disjoint, so the longer one lies wholly before or after the padding
        if longer[0] >= insert_at:
            longer[:] = [p + num for p in longer]

    for i, j in zip(drop, drag):
        items[i], items[j] = items[j], items[i]
    return [t for t in items if t is not PLACEHOLDER]


def merge_groups(state, dropped_ref, dragged_ref):
    """Drop one run onto another: the two trade places as blocks.

    Memberships are untouched; only positions change.
    """
    with transaction(state, 'merge_groups') as txn:
        drop = resolve_run(state, dropped_ref)
        drag = resolve_run(state, dragged_ref)
        if drop[0] is drag[0]:
            txn.changed = False
            return False

        seq = state.sequence
        seq.replace(interleave(
            seq.to_list(),
            [seq.position_of(t.id) for t in drop],
            [seq.position_of(t.id) for t in drag],
        ))
    log.debug(f'[Reorder] merged {dragged_ref!r} ({len(drag)}) onto {dropped_ref!r} ({len(drop)})')
    return txn.changed


def move_group_to_edge(state, group_ref, edge):
    """Move a whole run, in order, to the front (after the stage) or the back."""
    if edge not in (FRONT, BACK):
        raise ValueError(f'edge must be {FRONT!r} or {BACK!r}, got {edge!r}')

    with transaction(state, 'move_group_to_edge') as txn:
        run = resolve_run(state, group_ref)
        moving = {t.id for t in run}
        rest = [t for t in state.sequence if t.id not in moving]
        if edge == FRONT:
            front = 1 if rest and rest[0].is_stage else 0
            new = rest[:front] + run + rest[front:]
        else:
            new = rest + run
        state.sequence.replace(new)
    return txn.changed
