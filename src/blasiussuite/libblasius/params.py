"""
Run parameters for a Blasius integration.

Parameters come from defaults, an optional parameter file, and the
command line, in increasing order of precedence.  The parameter file has
one numeric value per line with optional trailing ``!`` comments::

    8.8         ! boundary
    0.2         ! interval
    2.2e-16     ! tolerance

Trailing lines may be omitted; omitted values keep their defaults.
"""

import math
from dataclasses import dataclass, replace

from blasiussuite.core.constants import (
    DEFAULT_BOUNDARY,
    DEFAULT_INTERVAL,
    DEFAULT_TOLERANCE,
    MAXSTP,
)
from .integrator import ConfigurationError, IntegratorStatus, Tolerances

SCHEMES = ("explicit", "implicit")

_FILE_FIELDS = ("boundary", "interval", "tolerance")


# ---------------------------------------------------------------------------
# Data structure
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RunParams:
    """
    Immutable run configuration.

    Attributes
    ----------
    boundary : float
        Target position.  Negative values integrate backward.
    interval : float
        Spacing of reported checkpoints.
    tolerance : float
        Absolute and relative error tolerance.
    scheme : str
        ``"explicit"`` or ``"implicit"``.
    max_steps : int
        Ceiling on internal integrator steps for the whole run.
    """

    boundary: float = DEFAULT_BOUNDARY
    interval: float = DEFAULT_INTERVAL
    tolerance: float = DEFAULT_TOLERANCE
    scheme: str = "explicit"
    max_steps: int = MAXSTP

    @property
    def direction(self) -> int:
        return -1 if self.boundary < 0 else 1

    @property
    def tolerances(self) -> Tolerances:
        return Tolerances.from_tolerance(self.tolerance)

    def validate(self):
        """Raise ``ConfigurationError`` unless the parameters describe a run."""
        if not math.isfinite(self.boundary):
            raise ConfigurationError(f"Boundary must be finite, got {self.boundary!r}")
        if not (self.interval > 0.0 and math.isfinite(self.interval)):
            raise ConfigurationError(
                f"Output interval must be positive and finite, got {self.interval!r}"
            )
        if not (self.tolerance > 0.0 and math.isfinite(self.tolerance)):
            raise ConfigurationError(
                f"Tolerance must be positive and finite, got {self.tolerance!r}",
                IntegratorStatus.EBADTOL,
            )
        if self.scheme not in SCHEMES:
            raise ConfigurationError(
                f"Scheme must be one of {', '.join(SCHEMES)}, got {self.scheme!r}"
            )
        if self.scheme == "implicit" and self.direction < 0:
            raise ConfigurationError(
                "Backward integration is only supported with the explicit scheme"
            )
        if self.max_steps < 1:
            raise ConfigurationError(
                f"max_steps must be at least 1, got {self.max_steps!r}"
            )
        return self

    def updated(self, **changes):
        """Copy with the non-``None`` entries of ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------
def GetFileParam(file_handle):
    """Read one numeric parameter from a file handle.

    Reads one line and converts its first whitespace-delimited token to
    float.  Returns ``None`` at end of file.

    Raises
    ------
    ValueError
        If the line is blank, comment-only, or not numeric.
    """
    line = file_handle.readline()
    if not line:
        return None
    parts = line.split()
    if not parts:
        raise ValueError(f"Empty line in parameter file: {line!r}")
    token = parts[0]
    if token.startswith("!"):
        raise ValueError(f"Comment-only line: {line!r}")
    return float(token)


def readrunparams_sub(fh, params=None):
    """Read run parameters from an open file handle on top of ``params``."""
    params = params or RunParams()
    values = {}
    for name in _FILE_FIELDS:
        value = GetFileParam(fh)
        if value is None:
            break
        values[name] = value
    return params.updated(**values)


def ReadRunParams(filename, params=None):
    """Read run parameters from a named file."""
    try:
        with open(filename, "r") as fh:
            return readrunparams_sub(fh, params)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read parameter file {filename}: {exc}") from exc


def writerunparams_sub(fh, params):
    """Write run parameters to an open file handle."""
    fh.write(f"{params.boundary:25.16E} ! Boundary position. (eta)\n")
    fh.write(f"{params.interval:25.16E} ! Output interval. (eta)\n")
    fh.write(f"{params.tolerance:25.16E} ! Error tolerance.\n")


def WriteRunParams(filename, params):
    """Write run parameters to a named file."""
    with open(filename, "w") as fh:
        writerunparams_sub(fh, params)
