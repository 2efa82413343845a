"""Layer order and sprite grouping for the editor's target list.

Public surface:
  RuntimeState, TargetSequence        – owned context and ordered targets
  Target, Sprite, GroupDescriptor      – model primitives
  check_invariants                     – group/sequence consistency check
  ReorderError and subclasses          – rejected operations
  spriteorder.ops                      – the reorder/group operations
  spriteorder.ui.signals               – Qt bridge for change notifications
"""

from .errors import (
    AlreadyGrouped, InvariantViolation, NotASprite, NotFound,
    OperationInProgress, ReorderError,
)
from .invariants import check_invariants
from .state import (
    GroupDescriptor, RuntimeState, Sprite, Target, TargetSequence,
    group_id_for, leader_id_of,
)

__all__ = [
    "RuntimeState", "TargetSequence", "Target", "Sprite", "GroupDescriptor",
    "group_id_for", "leader_id_of", "check_invariants",
    "ReorderError", "NotFound", "NotASprite", "AlreadyGrouped",
    "InvariantViolation", "OperationInProgress",
]
