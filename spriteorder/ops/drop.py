"""Drag-and-drop dispatch for the sprite list.

The sprite list lets the user pick up a single sprite or a whole group and
drop it on a sprite row, on a group header, or past either end of the list.
handle_drop() turns one such gesture into the matching reorder operation:

  drag \\ drop       ungrouped sprite   grouped sprite        group header         front/back
  sprite            move_ungrouped     join_group (*)        join_group_at_head   move_to_front/back
  group             merge_groups       merge_groups          merge_groups         move_group_to_edge

(*) a sprite dropped on a member of its own group swaps places with it.
A grouped sprite dropped on an ungrouped one leaves its group (join_group
with an ungrouped anchor).
"""

from dataclasses import dataclass
from typing import Optional

from ..core.log import get_logger
from .groups import require_sprite, same_group
from .merge import merge_groups, move_group_to_edge
from .reorder import (
    BACK, FRONT, join_group, join_group_at_head, move_to_back, move_to_front,
    move_ungrouped, swap_positions,
)

SPRITE = 'sprite'
GROUP = 'group'

log = get_logger(__name__)


@dataclass(frozen=True)
class Drag:
    kind: str   # SPRITE or GROUP
    ref: str    # target id, or group id for GROUP


@dataclass(frozen=True)
class Drop:
    kind: str                  # SPRITE, GROUP, FRONT or BACK
    ref: Optional[str] = None  # target id / group id; unused for FRONT and BACK


def _drop_sprite(state, drag_ref, drop_ref):
    dragged = require_sprite(state, drag_ref)
    # the stage row is not a drop slot
    dropped = require_sprite(state, drop_ref)
    if dropped.group is None and dragged.group is None:
        return 'move_ungrouped', move_ungrouped(
            state, drag_ref, state.sequence.position_of(drop_ref))
    if same_group(dragged, dropped):
        return 'swap_positions', swap_positions(state, drop_ref, drag_ref)
    return 'join_group', join_group(state, drag_ref, drop_ref)


def handle_drop(state, drag: Drag, drop: Drop):
    """Apply the reorder operation for one drop gesture.

    Returns the operation's result (True if the order or grouping changed).
    Raises ValueError for an unknown drag/drop kind; ReorderError subclasses
    propagate from the operation itself.
    """
    if drag.kind == SPRITE:
        if drop.kind == SPRITE:
            op, result = _drop_sprite(state, drag.ref, drop.ref)
        elif drop.kind == GROUP:
            op, result = 'join_group_at_head', join_group_at_head(state, drag.ref, drop.ref)
        elif drop.kind == FRONT:
            op, result = 'move_to_front', move_to_front(state, drag.ref)
        elif drop.kind == BACK:
            op, result = 'move_to_back', move_to_back(state, drag.ref)
        else:
            raise ValueError(f'Unknown drop kind {drop.kind!r}')
    elif drag.kind == GROUP:
        if drop.kind in (SPRITE, GROUP):
            op, result = 'merge_groups', merge_groups(state, drop.ref, drag.ref)
        elif drop.kind in (FRONT, BACK):
            op, result = 'move_group_to_edge', move_group_to_edge(state, drag.ref, drop.kind)
        else:
            raise ValueError(f'Unknown drop kind {drop.kind!r}')
    else:
        raise ValueError(f'Unknown drag kind {drag.kind!r}')

    log.debug(f'[Drop] {drag.kind}:{drag.ref} -> {drop.kind}:{drop.ref} via {op} (changed={result})')
    return result
