"""libblasius sub-package: integration driver, reporting and utilities."""

# Import modules themselves (allows: from blasiussuite.libblasius import integrator)
from . import integrator
from . import logger
from . import params
from . import reporter

__all__ = [
    "integrator",
    "logger",
    "params",
    "reporter",
]
