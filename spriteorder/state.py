"""Central runtime context for target ordering.

Replaces the shared `runtime.targets` array of the editor VM with an owned
context object: the ordered TargetSequence, the per-sprite group
descriptors hanging off each Sprite, an observer list for UI updates and
the undo history. Operations in `ops/` are the only writers.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional

from .core.log import get_logger, setup_logging
from .core.settings import Settings
from .errors import InvariantViolation, NotFound, OperationInProgress
from .undo import UndoStack, capture_state

# groupId is always the leader's target id plus this suffix
GROUP_ID_SUFFIX = 'g'

log = get_logger(__name__)


def group_id_for(target_id: str) -> str:
    """Group id of a group led by `target_id`."""
    return f'{target_id}{GROUP_ID_SUFFIX}'


def leader_id_of(group_id: str) -> str:
    """Target id of the leader named by `group_id`."""
    if group_id.endswith(GROUP_ID_SUFFIX):
        return group_id[:-len(GROUP_ID_SUFFIX)]
    return group_id


@dataclass
class GroupDescriptor:
    group_id: str
    group_name: str = ''
    index_in_group: int = 0
    is_open: bool = True
    is_edit: bool = False
    order: int = 0

    def to_dict(self):
        return {
            'groupId': self.group_id, 'groupName': self.group_name,
            'spriteIndexInGroup': self.index_in_group,
            'groupOpen': self.is_open, 'groupIsEdit': self.is_edit,
            'groupIndex': self.order,
        }

    @staticmethod
    def from_dict(d) -> Optional['GroupDescriptor']:
        # The editor stores "ungrouped" as an empty customField mapping
        if not d:
            return None
        return GroupDescriptor(
            group_id=d['groupId'], group_name=d.get('groupName', ''),
            index_in_group=d.get('spriteIndexInGroup', 0),
            is_open=d.get('groupOpen', True),
            is_edit=d.get('groupIsEdit', False),
            order=d.get('groupIndex', 0),
        )


@dataclass
class Sprite:
    name: str
    group: Optional[GroupDescriptor] = None


@dataclass(eq=False)
class Target:
    """One sprite instance or the stage. Compared by identity."""
    id: str
    name: str = ''
    is_stage: bool = False
    sprite: Optional[Sprite] = None
    is_original: bool = True

    @property
    def group(self) -> Optional[GroupDescriptor]:
        """Group descriptor of this target; clones and the stage have none."""
        if self.is_stage or not self.is_original or self.sprite is None:
            return None
        return self.sprite.group

    def to_dict(self):
        return {
            'id': self.id, 'name': self.name, 'isStage': self.is_stage,
            'customField': self.group.to_dict() if self.group else {},
        }


class TargetSequence:
    """Ordered targets plus an id -> position index kept in step with them."""

    def __init__(self, targets: Iterable[Target] = ()):
        self._targets: list[Target] = list(targets)
        self._positions: dict[str, int] = {}
        self._reindex()

    def _reindex(self):
        positions = {}
        for i, t in enumerate(self._targets):
            if t.id in positions:
                raise InvariantViolation(f'Duplicate target id {t.id!r} in sequence')
            positions[t.id] = i
        self._positions = positions

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets)

    def __getitem__(self, pos: int) -> Target:
        return self._targets[pos]

    def __contains__(self, target_id) -> bool:
        return target_id in self._positions

    def ids(self) -> list[str]:
        return [t.id for t in self._targets]

    def to_list(self) -> list[Target]:
        return list(self._targets)

    def get(self, target_id: str) -> Optional[Target]:
        pos = self._positions.get(target_id)
        return None if pos is None else self._targets[pos]

    def position_of(self, target_id: str) -> int:
        try:
            return self._positions[target_id]
        except KeyError:
            raise NotFound(f'No target with id {target_id!r}') from None

    def remove_at(self, pos: int) -> Target:
        target = self._targets.pop(pos)
        self._reindex()
        return target

    def insert_at(self, pos: int, target: Target):
        self._targets.insert(pos, target)
        try:
            self._reindex()
        except InvariantViolation:
            self._targets.pop(pos)
            self._reindex()
            raise

    def swap(self, pos_a: int, pos_b: int):
        t = self._targets
        t[pos_a], t[pos_b] = t[pos_b], t[pos_a]
        self._positions[t[pos_a].id] = pos_a
        self._positions[t[pos_b].id] = pos_b

    def replace(self, targets: Iterable[Target]):
        old = self._targets
        self._targets = list(targets)
        try:
            self._reindex()
        except InvariantViolation:
            self._targets = old
            self._reindex()
            raise


class RuntimeState:
    """Owned context: target order, group metadata and change observers."""

    def __init__(self, targets: Iterable[Target] = (), settings: Optional[Settings] = None,
                 editing_target: Optional[str] = None):
        self.settings = settings or Settings()
        setup_logging(self.settings.log_level)
        from .invariants import check_invariants
        self.sequence = TargetSequence(targets)
        check_invariants(self)
        self.editing_target: Optional[str] = editing_target

        self.history = UndoStack(max_size=self.settings.undo_max_size)
        self.history.push(capture_state(self))

        # Internal
        self._listeners: list[Callable[[], None]] = []
        self._in_flight: Optional[str] = None

    def on_change(self, callback: Callable[[], None]):
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def notify(self, source=None):
        log.debug(f'[State] sequence changed ({source}): {self.sequence.ids()}')
        for cb in list(self._listeners):
            cb()

    @property
    def busy(self) -> bool:
        return self._in_flight is not None

    # Lookup helpers
    def get_target_by_id(self, target_id) -> Optional[Target]:
        return self.sequence.get(target_id)

    def require_target(self, target_id) -> Target:
        target = self.sequence.get(target_id)
        if target is None:
            raise NotFound(f'No target with id {target_id!r}')
        return target

    def stage(self) -> Optional[Target]:
        return next((t for t in self.sequence if t.is_stage), None)

    def originals(self) -> list[Target]:
        return [t for t in self.sequence if t.is_original]

    def front_position(self) -> int:
        """First slot a sprite can take: right after a leading stage."""
        if len(self.sequence) and self.sequence[0].is_stage:
            return 1
        return 0

    def targets_update(self) -> dict:
        """Payload the editor UI renders its sprite list from."""
        return {
            # Don't report clones.
            'targetList': [t.to_dict() for t in self.sequence if t.is_original],
            'editingTarget': self.editing_target,
        }

    def load_targets(self, targets: Iterable[Target]):
        """Replace the whole list (sprites installed or deleted elsewhere).

        Resets undo history since older snapshots name other targets.
        """
        from .invariants import check_invariants
        if self.busy:
            raise OperationInProgress(f'{self._in_flight} is still running')
        old = self.sequence.to_list()
        self.sequence.replace(targets)
        try:
            check_invariants(self)
        except InvariantViolation:
            self.sequence.replace(old)
            raise
        if self.editing_target not in self.sequence:
            self.editing_target = None
        self.history.clear()
        self.history.push(capture_state(self))
        self.notify('load_targets')
