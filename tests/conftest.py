from typing import Callable

import pytest

from spriteorder.core.settings import Settings
from spriteorder.state import RuntimeState
from tests.helpers import make_sprite, make_stage


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(tmp_path / "settings.json")


@pytest.fixture
def build(settings) -> Callable[..., RuntimeState]:
    """Build a state from a layout: "A" is an ungrouped sprite, ("X", "Y")
    a group led by X. A stage is put in front unless stage=False."""

    def _build(*layout, stage: bool = True) -> RuntimeState:
        targets = [make_stage()] if stage else []
        for entry in layout:
            if isinstance(entry, str):
                targets.append(make_sprite(entry))
                continue
            group_id = f"{entry[0]}g"
            for rank, target_id in enumerate(entry):
                targets.append(make_sprite(target_id, group_id, rank))
        return RuntimeState(targets, settings=settings)

    return _build


@pytest.fixture
def describe() -> Callable[[RuntimeState], list[tuple]]:
    """(id, group id, rank) for every target in order; None/None if ungrouped."""

    def _describe(state: RuntimeState) -> list[tuple]:
        rows = []
        for t in state.sequence:
            g = t.group
            rows.append((t.id, g.group_id if g else None, g.index_in_group if g else None))
        return rows

    return _describe


@pytest.fixture
def changes() -> Callable[[RuntimeState], list[int]]:
    """Subscribe to a state and collect one entry per notification."""

    def _changes(state: RuntimeState) -> list[int]:
        calls: list[int] = []
        state.on_change(lambda: calls.append(1))
        return calls

    return _changes
