"""Errors raised by the reordering operations.

All of them are local validation failures: an operation that raises has
left the target sequence and every group descriptor exactly as it found
them.
"""


class ReorderError(Exception):
    """Base class for every rejected operation."""


class NotFound(ReorderError):
    """A referenced target, sprite or group does not exist."""


class NotASprite(ReorderError):
    """The operation was pointed at the stage."""


class AlreadyGrouped(ReorderError):
    """create_group was called on a sprite that already has a descriptor."""


class InvariantViolation(ReorderError):
    """Group/sequence consistency check failed before commit."""


class OperationInProgress(ReorderError):
    """An operation was started while another one was still running."""
