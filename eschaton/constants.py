"""
Central configuration constants for the eschaton world-state simulator.

Defines reference values, transition factors, calculator bounds and the
default genesis parameters used across multiple modules.
"""

import numpy as np


# ============================================================================
# Reference Constants (Constant Table Generator)
# ============================================================================

SPEED_OF_LIGHT = 299792458.0              # m/s
PLANCK_CONSTANT = 6.62607015e-34          # J*s
GRAVITATIONAL_CONSTANT = 6.67430e-11      # m^3/(kg*s^2)
VACUUM_PERMITTIVITY = 8.8541878128e-12    # F/m

# Order matters: indices 0-3 of every generated table
REFERENCE_CONSTANTS = (
    SPEED_OF_LIGHT,
    PLANCK_CONSTANT,
    GRAVITATIONAL_CONSTANT,
    VACUUM_PERMITTIVITY,
)


# ============================================================================
# Entity Configuration
# ============================================================================

MAX_NAME_LENGTH = 256         # Names must be strictly shorter than this
MAX_PETITION_LENGTH = 1024    # Formed petitions must be strictly shorter than this

DEFAULT_CONSCIOUSNESS_LEVEL = 1.0
DEFAULT_FREE_WILL_CAPACITY = 1.0

PETITION_TEMPLATE = "Petition from {name}: Please guide me."


# ============================================================================
# Transition Engine
# ============================================================================

INTERVENTION_ENTROPY_FACTOR = 0.9     # 10% entropy reduction per intervention
GUIDANCE_ENTROPY_FACTOR = 0.99        # Extra reduction when guidance is requested
GUIDANCE_PHRASE = "guide me"
PETITION_LIFESPAN_INCREMENT = 1       # Days added per answered petition


# ============================================================================
# Terminal-Time Calculator
# ============================================================================

SECONDS_PER_DAY = 24 * 60 * 60

# Only the first N constants influence the prediction
INFLUENCE_CONSTANT_LIMIT = 10
PHYSICAL_INFLUENCE_MODULUS = 100.0

CONSCIOUSNESS_INFLUENCE_FACTOR = 0.12345
CONSCIOUSNESS_INFLUENCE_CAP = 1000.0

# Platform long (64-bit)
MAX_TERMINAL_DAYS = int(np.iinfo(np.int64).max)

# Returned instead of raising when no world is given
TERMINAL_TIME_SENTINEL = -1


# ============================================================================
# Genesis Defaults
# ============================================================================

DEFAULT_NUM_CONSTANTS = 30
DEFAULT_ENTROPY_LEVEL = 0.618         # Golden ratio
DEFAULT_MAX_ENTROPY = 1.0
DEFAULT_LIFESPAN_DAYS = 5000 * 365    # 5000 years

SPACETIME_DIMENSIONS = 4
DEFAULT_MATTER = 1.0
DEFAULT_ENERGY = 1.0

# Natural-law evolution rate (per unit temporal coordinate)
EVOLUTION_RATE = 0.1


# ============================================================================
# Diagnostics
# ============================================================================

# Set ESCHATON_PROFILE=1 to time transitions (see engine.WorldEngine)
PROFILE_ENV_VAR = 'ESCHATON_PROFILE'
