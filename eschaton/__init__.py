"""
Eschaton World-State Simulation

A deterministic, headless world-state simulator. A world holds physical
constants, an entropy level and a registry of conscious entities; it is
transformed by transitions that always yield a new, independent world,
and it predicts the days remaining until its terminal state.
"""

__version__ = "0.1.0"
