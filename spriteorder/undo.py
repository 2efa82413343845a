"""Undo/redo system for target ordering.

Captures snapshots of RuntimeState and allows undo/redo navigation. The
same snapshots let a failed operation put everything back exactly as it
was.
"""

import copy
from typing import Optional

from .errors import InvariantViolation


class UndoStack:
    """Committed order snapshots: the live one plus its undo and redo branches.

    At most `max_size` snapshots are kept, the live one included; the oldest
    undo entries are dropped first. Committing after an undo discards the
    redo branch.
    """

    def __init__(self, max_size: int = 100):
        self.max_size = max(1, max_size)
        self.current: Optional[dict] = None
        self._past: list[dict] = []     # oldest first
        self._future: list[dict] = []   # next redo last

    def __len__(self) -> int:
        return len(self._past) + len(self._future) + (self.current is not None)

    def snapshots(self) -> list[dict]:
        """Every kept snapshot, oldest first."""
        live = [] if self.current is None else [self.current]
        return self._past + live + self._future[::-1]

    def can_undo(self) -> bool:
        return bool(self._past)

    def can_redo(self) -> bool:
        return bool(self._future)

    def push(self, snapshot: dict):
        if self.current is not None:
            self._past.append(self.current)
        self.current = snapshot
        self._future.clear()
        overflow = len(self._past) - (self.max_size - 1)
        if overflow > 0:
            del self._past[:overflow]

    def undo(self) -> Optional[dict]:
        """Step back; the returned snapshot becomes the live one."""
        if not self._past:
            return None
        self._future.append(self.current)
        self.current = self._past.pop()
        return self.current

    def redo(self) -> Optional[dict]:
        if not self._future:
            return None
        self._past.append(self.current)
        self.current = self._future.pop()
        return self.current

    def clear(self):
        self.current = None
        self._past.clear()
        self._future.clear()


def capture_state(state) -> dict:
    """Capture a snapshot of RuntimeState.

    Captures:
    - the order of target ids
    - every original target's group descriptor (None when ungrouped)
    - the editing target

    Does NOT capture the targets themselves; they are opaque handles
    owned by the runtime and are looked up again by id on restore.
    """
    return {
        'order': state.sequence.ids(),
        'groups': {
            t.id: copy.deepcopy(t.group.to_dict()) if t.group else None
            for t in state.sequence if t.is_original and t.sprite is not None
        },
        'editing_target': state.editing_target,
    }


def restore_state(state, snapshot: dict):
    """Restore RuntimeState from a snapshot.

    The snapshot must name exactly the targets currently in the sequence.
    """
    from .state import GroupDescriptor

    by_id = {t.id: t for t in state.sequence}
    if set(by_id) != set(snapshot['order']) or len(by_id) != len(snapshot['order']):
        raise InvariantViolation('Snapshot does not match the live targets')

    state.sequence.replace(by_id[tid] for tid in snapshot['order'])
    for tid, desc in snapshot['groups'].items():
        target = by_id[tid]
        if target.sprite is not None:
            target.sprite.group = GroupDescriptor.from_dict(desc)
    state.editing_target = snapshot['editing_target']
