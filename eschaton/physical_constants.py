"""
Constant table generator.

Produces the ordered table of physical constants a world is created with.
Pure function, no shared state.
"""

import numpy as np

from .constants import REFERENCE_CONSTANTS
from .errors import InvalidArgumentError, AllocationError


def generate_constants(num_constants: int) -> np.ndarray:
    """
    Generate a deterministic table of physical constants.

    Indices 0-3 hold the reference constants (speed of light, Planck's
    constant, gravitational constant, vacuum permittivity). Every index
    i >= 4 holds the placeholder 1/(i+1).

    Args:
        num_constants: Table length (must be a positive int)

    Returns:
        Read-only float64 array of length num_constants

    Raises:
        InvalidArgumentError: num_constants is not a positive int
        AllocationError: the table could not be allocated
    """
    # bool is an int subclass but never a meaningful count
    if isinstance(num_constants, bool) or not isinstance(num_constants, (int, np.integer)):
        raise InvalidArgumentError(f"num_constants must be an int, got {type(num_constants).__name__}")
    if num_constants <= 0:
        raise InvalidArgumentError(f"num_constants must be positive, got {num_constants}")

    n = int(num_constants)
    try:
        constants = np.empty(n, dtype=np.float64)
    except MemoryError as e:
        raise AllocationError(f"Cannot allocate {n} constants") from e

    head = min(n, len(REFERENCE_CONSTANTS))
    constants[:head] = REFERENCE_CONSTANTS[:head]

    if n > head:
        indices = np.arange(head, n, dtype=np.float64)
        constants[head:] = 1.0 / (indices + 1.0)

    constants.flags.writeable = False
    return constants
