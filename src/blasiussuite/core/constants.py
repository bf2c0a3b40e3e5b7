"""
Fixed constants of the Blasius similarity problem.

The equation order is fixed, so the state dimensionality is a module
constant rather than a run parameter.
"""

import numpy as np

# f, f', f''
NDIM = 3

# f''(0) for the unbounded Blasius problem (arXiv:1006.3888, eq. 11)
FPP0 = 0.33205733621519630

ETA0 = 0.0

# ─── Run defaults ─────────────────────────────────────────────────────
DEFAULT_BOUNDARY = 8.8
DEFAULT_INTERVAL = 0.2
EPS = float(np.finfo(np.float64).eps)
DEFAULT_TOLERANCE = EPS

# scipy refuses relative tolerances below this
RTOL_FLOOR = 100.0 * EPS

MAXSTP = 1_000_000


def initial_state():
    """Return a fresh copy of the initial condition (f, f', f'') at eta=0."""
    return np.array([0.0, 0.0, FPP0], dtype=np.float64)
