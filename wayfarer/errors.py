"""Engine exceptions.

Every engine operation either commits all of its writes or raises one of
these; nothing is retried internally.
"""


class PreconditionError(ValueError):
    """Raised when an operation is rejected before it changes anything.

    Invalid ids, id/relationship mismatches, unrecognized language codes and
    invalid paging directions all land here.
    """


class NotFoundError(PreconditionError):
    """Raised when a referenced id or key does not exist."""


class ScriptExecutionError(RuntimeError):
    """Raised when a Lua script cannot be run or faults while running."""


class ScriptResultError(ScriptExecutionError):
    """Raised when a text script returns fewer values than the text has fragments."""


class ResolutionError(RuntimeError):
    """Raised when text references something that cannot be resolved."""
