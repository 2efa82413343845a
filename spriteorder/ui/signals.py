"""Qt bridge for the change notifier.

The sprite list widget of the editor listens on these signals instead of
registering plain callbacks on RuntimeState.
"""

from PySide6.QtCore import QObject, Signal


class SequenceSignals(QObject):
    """Re-emits each committed change of a RuntimeState as Qt signals."""

    sequence_changed = Signal()
    # payload of RuntimeState.targets_update(): {'targetList': [...], 'editingTarget': id}
    targets_updated = Signal(object)

    def __init__(self, state, parent=None):
        super().__init__(parent)
        self.state = state
        state.on_change(self._on_state_change)

    def _on_state_change(self):
        self.sequence_changed.emit()
        self.targets_updated.emit(self.state.targets_update())

    def detach(self):
        """Stop listening to the state (e.g. when the editor closes)."""
        self.state.remove_listener(self._on_state_change)
