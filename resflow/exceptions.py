"""Exception types raised by resflow."""


class ResflowError(Exception):
    """Base class for all resflow errors."""


class InvalidArgumentError(ResflowError, ValueError):
    """Malformed input: negative capacity, vertex out of range, bad algorithm name."""


class FlowInvariantError(ResflowError, RuntimeError):
    """A residual-network invariant was violated.

    This signals a defect (in an engine or in code that edited the network by
    hand), not a recoverable condition. Any flow computed after it is invalid.
    """
