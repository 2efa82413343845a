"""Undo/redo of committed reorder operations."""

from ..undo import restore_state
from .transaction import transaction


def undo(state):
    """Step back to the previous committed order. Returns False if none."""
    if not state.history.can_undo():
        return False
    with transaction(state, 'undo', record=False):
        snapshot = state.history.undo()
        try:
            restore_state(state, snapshot)
        except Exception:
            state.history.redo()
            raise
    return True


def redo(state):
    """Re-apply the next committed order. Returns False if none."""
    if not state.history.can_redo():
        return False
    with transaction(state, 'redo', record=False):
        snapshot = state.history.redo()
        try:
            restore_state(state, snapshot)
        except Exception:
            state.history.undo()
            raise
    return True
