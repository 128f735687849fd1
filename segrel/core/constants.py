"""Central numerical tolerances for the intersection solvers.

Keeps the machine epsilon and the few solver-specific scale factors in one
place so they can be tuned consistently and referenced without scattering
literals.
"""
from __future__ import annotations

import sys

# Machine precision
EPS_MACHINE: float = sys.float_info.epsilon   # 2**-52 for IEEE-754 doubles

# Relative tolerance of the plain fuzzy comparison (|a-b| * 1e12 <= min(|a|,|b|))
FUZZY_RELATIVE_SCALE: float = 1e12

# Solver specific scale factors
GAUSS_COLLINEAR_FACTOR: float = 4.0       # collinear residual slack (in eps * |dir| * magnitude)
FLSI_STABILIZED_TOLERANCE: float = 1000.0  # parallel threshold (in eps * |a|^2)

__all__ = [
    'EPS_MACHINE',
    'FUZZY_RELATIVE_SCALE',
    'GAUSS_COLLINEAR_FACTOR',
    'FLSI_STABILIZED_TOLERANCE',
]
