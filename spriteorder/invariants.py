"""Consistency checks for groups laid out in the target sequence.

For every group id carried by an original target:
  - ranks are exactly 0..n-1, no gaps, no duplicates
  - the rank-0 member is the leader and the group id is its id + "g"
  - members sit in one unbroken run, in ascending rank order
The stage is never grouped. Clones are skipped.
"""

from __future__ import annotations

from .errors import InvariantViolation
from .state import group_id_for


def group_runs(state) -> dict[str, list[tuple[int, object]]]:
    """Map group id -> [(position among originals, target), ...] in order."""
    runs: dict[str, list] = {}
    for pos, t in enumerate(state.originals()):
        if t.is_stage:
            if t.sprite is not None and t.sprite.group is not None:
                raise InvariantViolation('The stage cannot belong to a group')
            continue
        g = t.group
        if g is None:
            continue
        runs.setdefault(g.group_id, []).append((pos, t))
    return runs


def check_invariants(state):
    """Raise InvariantViolation if any group is malformed."""
    for gid, members in group_runs(state).items():
        n = len(members)
        ranks = [t.group.index_in_group for _, t in members]

        if sorted(ranks) != list(range(n)):
            raise InvariantViolation(f'Group {gid!r} has ranks {sorted(ranks)}, expected 0..{n - 1}')

        leader = next(t for _, t in members if t.group.index_in_group == 0)
        if gid != group_id_for(leader.id):
            raise InvariantViolation(
                f'Group {gid!r} is led by {leader.id!r}, expected id {group_id_for(leader.id)!r}')

        positions = [pos for pos, _ in members]
        if positions != list(range(positions[0], positions[0] + n)):
            raise InvariantViolation(f'Group {gid!r} is not contiguous: positions {positions}')
        if ranks != list(range(n)):
            raise InvariantViolation(f'Group {gid!r} members are out of rank order: {ranks}')


def is_consistent(state) -> bool:
    try:
        check_invariants(state)
    except InvariantViolation:
        return False
    return True
