"""Group create/rename/toggle operations and group predicates."""

from ..core.log import get_logger
from ..errors import AlreadyGrouped, NotASprite, NotFound
from ..state import GroupDescriptor, Target, group_id_for
from .transaction import transaction

log = get_logger(__name__)


def descriptor_of(obj):
    """Group descriptor of a Target or Sprite, None when ungrouped."""
    if isinstance(obj, Target):
        return obj.group
    return getattr(obj, 'group', None)


def is_grouped(obj) -> bool:
    return descriptor_of(obj) is not None


def same_group(a, b) -> bool:
    da, db = descriptor_of(a), descriptor_of(b)
    return da is not None and db is not None and da.group_id == db.group_id


def is_leader(descriptor) -> bool:
    return descriptor is not None and descriptor.index_in_group == 0


def group_members(state, group_id) -> list[Target]:
    """Members of a group in sequence order (which is rank order)."""
    return [t for t in state.sequence if t.group is not None and t.group.group_id == group_id]


def group_ids(state) -> list[str]:
    """Every group id present, in order of first appearance."""
    seen = []
    for t in state.sequence:
        if t.group is not None and t.group.group_id not in seen:
            seen.append(t.group.group_id)
    return seen


def require_sprite(state, target_id) -> Target:
    target = state.require_target(target_id)
    if not target.is_original:
        # clones never appear in the editor's sprite list
        raise NotFound(f'{target_id!r} is a clone')
    if target.is_stage:
        raise NotASprite(f'{target_id!r} is the stage')
    if target.sprite is None:
        raise NotASprite(f'No sprite associated with target {target_id!r}')
    return target


def require_group(state, group_id) -> list[Target]:
    members = group_members(state, group_id)
    if not members:
        raise NotFound(f'No group with id {group_id!r}')
    return members


def create_group(state, sprite_id, order=0):
    """Make a sprite the sole leader of a new group. Returns its descriptor."""
    with transaction(state, 'create_group'):
        target = require_sprite(state, sprite_id)
        if target.sprite.group is not None:
            raise AlreadyGrouped(f'{sprite_id!r} already belongs to {target.sprite.group.group_id!r}')
        target.sprite.group = GroupDescriptor(
            group_id=group_id_for(sprite_id),
            group_name=state.settings.group_name(target.sprite.name or target.name),
            index_in_group=0,
            is_open=True,
            is_edit=False,
            order=order,
        )
    log.debug(f'[Groups] created {target.sprite.group.group_id!r}')
    return target.sprite.group


def _update_members(state, source, group_id, **changes):
    with transaction(state, source):
        for t in require_group(state, group_id):
            for k, v in changes.items():
                setattr(t.group, k, v)


def rename_group(state, new_name, group_id):
    """Set the display name shared by every member of a group."""
    _update_members(state, 'rename_group', group_id, group_name=new_name)


def set_group_open(state, status, group_id):
    """Expand/collapse a group in the sprite list."""
    _update_members(state, 'set_group_open', group_id, is_open=bool(status))


def set_group_edit(state, status, group_id):
    """Toggle a group's edit mode (e.g. while its name is being typed)."""
    _update_members(state, 'set_group_edit', group_id, is_edit=bool(status))
