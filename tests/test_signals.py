from __future__ import annotations

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from spriteorder.ops import move_to_front  # noqa: E402
from spriteorder.ui.signals import SequenceSignals  # noqa: E402


@pytest.fixture(scope="module")
def app():
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


def test_committed_change_is_emitted(app, build) -> None:
    state = build("A", "B")
    signals = SequenceSignals(state)
    changed = []
    payloads = []
    signals.sequence_changed.connect(lambda: changed.append(1))
    signals.targets_updated.connect(lambda payload: payloads.append(payload))

    move_to_front(state, "B")

    assert changed == [1]
    assert [t["id"] for t in payloads[0]["targetList"]] == ["stage", "B", "A"]


def test_no_signal_for_no_op_or_after_detach(app, build) -> None:
    state = build("A", "B")
    signals = SequenceSignals(state)
    changed = []
    signals.sequence_changed.connect(lambda: changed.append(1))

    move_to_front(state, "A")
    signals.detach()
    move_to_front(state, "B")

    assert changed == []
