"""
blasiussuite: numerical solution of the Blasius boundary-layer equation.

The third-order similarity equation f''' = -f f''/2 is reduced to a
first-order system and integrated from a known high-precision initial
condition with an adaptive explicit or implicit Runge-Kutta solver,
reporting the profile at evenly spaced positions.
"""

# Import main sub-packages
from . import core
from . import libblasius

__version__ = "0.1.0"

__all__ = [
    "core",
    "libblasius",
]
