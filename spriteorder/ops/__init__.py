"""Operations modules: domain logic for the sprite list.

Each module contains plain functions that operate on RuntimeState inside a
transaction and notify its observers once on commit. Drag-and-drop
handlers either call handle_drop() or one operation directly.
"""

from .drop import Drag, Drop, GROUP, SPRITE, handle_drop
from .groups import (
    create_group, group_members, is_grouped, is_leader, rename_group,
    same_group, set_group_edit, set_group_open,
)
from .history import redo, undo
from .merge import merge_groups, move_group_to_edge
from .reorder import (
    BACK, FRONT, join_group, join_group_at_head, leave_group, move_to_back,
    move_to_front, move_ungrouped, swap_positions,
)
