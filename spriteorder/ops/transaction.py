"""Atomic unit for every mutation of the target order.

Only one transaction may run at a time. The body validates, then works on
live state; if it raises, leaves groups inconsistent or changes the number
of targets, the snapshot taken on entry is restored and the error
propagates. Observers hear about committed state only.
"""

from contextlib import contextmanager
from dataclasses import dataclass

from ..core.log import get_logger
from ..errors import InvariantViolation, OperationInProgress
from ..invariants import check_invariants
from ..undo import capture_state, restore_state

log = get_logger(__name__)


@dataclass
class Transaction:
    source: str
    changed: bool = True   # False for a no-op; nothing is recorded or notified


@contextmanager
def transaction(state, source: str, record: bool = True):
    """Run one operation atomically, then notify observers.

    Args:
        state: RuntimeState to mutate
        source: operation name, passed to notify() and the logs
        record: push the committed state onto the undo history
    """
    if state.busy:
        raise OperationInProgress(
            f'{source} started while {state._in_flight} is still running')

    txn = Transaction(source)
    state._in_flight = source
    snapshot = capture_state(state)
    targets = state.sequence.to_list()
    try:
        yield txn
        if len(state.sequence) != len(targets):
            raise InvariantViolation(
                f'{source} changed the number of targets ({len(targets)} -> {len(state.sequence)})')
        if txn.changed and capture_state(state) == snapshot:
            txn.changed = False
        if txn.changed:
            check_invariants(state)
    except Exception as e:
        state.sequence.replace(targets)
        restore_state(state, snapshot)
        log.warning(f'[Reorder] {source} rejected: {e}')
        raise
    finally:
        state._in_flight = None

    if not txn.changed:
        log.debug(f'[Reorder] {source}: nothing to do')
        return
    if record:
        state.history.push(capture_state(state))
    state.notify(source)
