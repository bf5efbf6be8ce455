class MosaicError(Exception):
    """Base class for engine errors."""


class IllegalDraft(MosaicError, ValueError):
    """A draft that breaks the rules; raised before any state changes."""


class InvariantViolation(MosaicError, RuntimeError):
    """Internal desync: a mutation was reached without going through the turn protocol."""
