"""
Exception hierarchy for the world-state simulator.

Every constructor or derivation either returns a fully valid object or
raises one of these. Each concrete error also subclasses the matching
builtin so callers may catch ValueError, MemoryError or ZeroDivisionError.
"""


class WorldStateError(Exception):
    """Base class for all simulator errors"""
    pass


class InvalidArgumentError(WorldStateError, ValueError):
    """Raised when a required input is missing or out of range"""
    pass


class AllocationError(WorldStateError, MemoryError):
    """Raised when memory for a new world or entity cannot be obtained"""
    pass


class DivisionByZeroError(WorldStateError, ZeroDivisionError):
    """Raised when a world has a degenerate max_entropy of zero"""
    pass


class LifecycleError(WorldStateError):
    """Raised on double release or use of a released world"""
    pass
