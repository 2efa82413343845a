"""Rank bookkeeping shared by the reorder operations.

Every gesture that moves a sprite in or out of a group is built from the
same steps, applied in this order:
  1. close_gap       - members ranked above the one that left move down
  2. reassign_leader - whoever now holds rank 0 names the group
  3. open_gap        - members at or above the insertion rank move up
These run on live descriptors inside a transaction; the intermediate
states (duplicate ranks, stale group ids) are never committed.
"""

from ..state import group_id_for
from .groups import group_members, is_leader


def close_gap(members, removed_rank: int):
    for t in members:
        if t.group.index_in_group > removed_rank:
            t.group.index_in_group -= 1


def reassign_leader(members):
    """Rewrite the group id of `members` after whoever holds rank 0.

    Returns the new group id, or None if nobody holds rank 0.
    """
    leader = next((t for t in members if is_leader(t.group)), None)
    if leader is None:
        return None
    gid = group_id_for(leader.id)
    for t in members:
        t.group.group_id = gid
    return gid


def open_gap(members, rank: int):
    for t in members:
        if t.group.index_in_group >= rank:
            t.group.index_in_group += 1


def detach(state, target):
    """Take `target` out of its group and clear its descriptor.

    Returns the descriptor it had, None if it was ungrouped.
    """
    desc = target.group
    if desc is None:
        return None
    survivors = [t for t in group_members(state, desc.group_id) if t is not target]
    close_gap(survivors, desc.index_in_group)
    if is_leader(desc) and survivors:
        reassign_leader(survivors)
    target.sprite.group = None
    return desc


def is_solo(state, target) -> bool:
    """True if `target` leads a group with no other members."""
    desc = target.group
    return is_leader(desc) and len(group_members(state, desc.group_id)) == 1
