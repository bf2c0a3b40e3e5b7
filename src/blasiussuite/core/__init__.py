"""Equation-level definitions for blasiussuite."""

# Import modules themselves (allows: from blasiussuite.core import blasius)
from . import blasius
from . import constants

__all__ = [
    "blasius",
    "constants",
]
