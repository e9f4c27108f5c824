"""Error types raised by circlehough."""


class CircleHoughError(Exception):
    """Base class for all circlehough errors."""


class ConfigurationError(CircleHoughError, ValueError):
    """Invalid detection parameters, raised before any voting starts."""


class OutOfRangeError(CircleHoughError, IndexError):
    """Accumulator cell read outside its declared dimensions."""


class InputError(CircleHoughError, ValueError):
    """Missing, undecodable or malformed image buffer."""


class VotingCancelledError(CircleHoughError):
    """Voting pass stopped through its cancel event; the accumulator is discarded."""
