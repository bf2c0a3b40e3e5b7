"""
Adaptive ODE integration driver.

Advances a state vector from one position to a target position with an
adaptive-step solver from ``scipy.integrate``, subdividing internally so
the local error stays within the configured tolerances.  The stepping
algorithms themselves are scipy's:

    - ExplicitScheme : DOP853, embedded Dormand-Prince 8(5,3)
    - ImplicitScheme : Radau IIA order 5, uses an analytic Jacobian

The solver is stepped by hand with ``t_bound`` set to the target, so no
internal step ever crosses a requested position and no dense output is
used.  The last accepted step size seeds the next advance.

Failures are returned as ``IntegratorStatus`` codes, never retried.
Relative tolerances between machine epsilon and scipy's floor of
``100 * eps`` are raised to the floor; tighter ones cannot be met by any
floating-point solver and every advance fails with ``EBADTOL``.
"""

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Union

from scipy.integrate import DOP853, Radau

from blasiussuite.core.constants import EPS, MAXSTP, NDIM, RTOL_FLOOR
from .logger import get_logger

log = get_logger(__name__)


# ─── Status codes ─────────────────────────────────────────────────────

class IntegratorStatus(IntEnum):
    SUCCESS = 0
    EINVAL = 4
    EFAILED = 5
    EMAXITER = 11
    EBADTOL = 13
    ENOPROG = 27


_STRERROR = {
    IntegratorStatus.SUCCESS: "success",
    IntegratorStatus.EINVAL: "invalid argument supplied by user",
    IntegratorStatus.EFAILED: "generic failure",
    IntegratorStatus.EMAXITER: "exceeded max number of iterations",
    IntegratorStatus.EBADTOL: "user specified an invalid tolerance",
    IntegratorStatus.ENOPROG: "step size underflow, iteration is not making progress",
}


def strerror(status):
    """Return a human-readable description of an integrator status."""
    try:
        return _STRERROR[IntegratorStatus(status)]
    except ValueError:
        return f"unknown error code {status}"


class ConfigurationError(ValueError):
    """Invalid run or solver configuration.  Carries the status to exit with."""

    def __init__(self, msg, status=IntegratorStatus.EINVAL):
        super().__init__(msg)
        self.status = IntegratorStatus(status)


# ─── Problem description ──────────────────────────────────────────────

@dataclass(frozen=True)
class ExplicitScheme:
    """Jacobian-free embedded Runge-Kutta stepping."""

    method: str = "DOP853"


@dataclass(frozen=True)
class ImplicitScheme:
    """Implicit Runge-Kutta stepping.

    ``jacobian(eta, f)`` returns ``(dfdy, df)``: the 3x3 Jacobian of the
    right-hand side and the right-hand side itself.
    """

    jacobian: Callable
    method: str = "Radau"


Scheme = Union[ExplicitScheme, ImplicitScheme]

_SOLVERS = {"DOP853": DOP853, "Radau": Radau}


@dataclass(frozen=True)
class Problem:
    """Immutable description of the first-order system to integrate."""

    rhs: Callable
    scheme: Scheme = field(default_factory=ExplicitScheme)
    dimension: int = NDIM
    params: tuple = ()

    def __post_init__(self):
        if self.dimension != NDIM:
            raise ConfigurationError(
                f"State dimension must be {NDIM}, got {self.dimension}"
            )
        if self.scheme.method not in _SOLVERS:
            raise ConfigurationError(f"Unknown stepping method {self.scheme.method!r}")

    @property
    def implicit(self) -> bool:
        return isinstance(self.scheme, ImplicitScheme)


@dataclass(frozen=True)
class Tolerances:
    """Error tolerances and initial step-size hint."""

    atol: float
    rtol: float
    first_step: float

    def __post_init__(self):
        for name in ("atol", "rtol", "first_step"):
            value = getattr(self, name)
            if not (value > 0.0 and math.isfinite(value)):
                raise ConfigurationError(
                    f"{name} must be positive and finite, got {value!r}",
                    IntegratorStatus.EBADTOL,
                )

    @classmethod
    def from_tolerance(cls, tol):
        """Single run tolerance: ``atol = rtol = tol``, first step ``sqrt(tol)``."""
        if not (tol > 0.0 and math.isfinite(tol)):
            raise ConfigurationError(
                f"Tolerance must be positive and finite, got {tol!r}",
                IntegratorStatus.EBADTOL,
            )
        return cls(atol=tol, rtol=tol, first_step=math.sqrt(tol))


# ─── Driver ───────────────────────────────────────────────────────────

class Integrator:
    """
    Stateful adaptive driver for one ``Problem``.

    Parameters
    ----------
    problem : Problem
    tolerances : Tolerances
    max_steps : int
        Ceiling on internal steps over the lifetime of the driver.

    Attributes
    ----------
    nsteps, nfev, njev, nlu : int
        Accepted steps and solver work counters, cumulative.
    message : str or None
        Solver message of the last failure.
    """

    def __init__(self, problem, tolerances, max_steps=MAXSTP):
        if max_steps < 1:
            raise ConfigurationError(f"max_steps must be at least 1, got {max_steps}")
        self.problem = problem
        self.tolerances = tolerances
        self.max_steps = int(max_steps)

        self.rtol = tolerances.rtol
        if self.rtol < EPS:
            log.warning(
                "Relative tolerance %g is below machine precision %g",
                self.rtol, EPS,
            )
        elif self.rtol < RTOL_FLOOR:
            log.info(
                "Relative tolerance %g is below the solver floor; using %g",
                self.rtol, RTOL_FLOOR,
            )
            self.rtol = RTOL_FLOOR

        self.h = tolerances.first_step
        self.nsteps = 0
        self.nfev = 0
        self.njev = 0
        self.nlu = 0
        self.message = None

    def _solver(self, eta, f, eta_target):
        """Build a scipy solver bounded by ``eta_target``."""
        scheme = self.problem.scheme
        kwargs = dict(
            rtol=self.rtol,
            atol=self.tolerances.atol,
            first_step=min(self.h, abs(eta_target - eta)),
        )
        if isinstance(scheme, ImplicitScheme):
            jacobian = scheme.jacobian
            # the rhs returned alongside is discarded; Radau evaluates fun on its own
            kwargs["jac"] = lambda t, y: jacobian(t, y)[0]
        return _SOLVERS[scheme.method](
            self.problem.rhs, eta, f, eta_target, **kwargs
        )

    def _classify(self, message):
        if message and "step size" in message.lower():
            return IntegratorStatus.ENOPROG
        return IntegratorStatus.EFAILED

    def advance(self, eta, eta_target, f):
        """
        Advance ``f`` in-place from ``eta`` up to ``eta_target``.

        Returns
        -------
        eta : float
            Position reached; ``eta_target`` on success, otherwise the
            last accepted position.
        status : IntegratorStatus
        """
        if eta_target == eta:
            return eta, IntegratorStatus.SUCCESS
        if self.rtol < EPS:
            self.message = f"relative tolerance {self.rtol:g} is below machine precision"
            return eta, IntegratorStatus.EBADTOL

        solver = self._solver(eta, f, eta_target)
        status = IntegratorStatus.SUCCESS
        y_good = solver.y.copy()
        t_good = solver.t
        h_max = 0.0

        while solver.status == "running":
            if self.nsteps >= self.max_steps:
                self.message = f"{self.max_steps} internal steps taken"
                status = IntegratorStatus.EMAXITER
                break
            message = solver.step()
            if solver.status == "failed":
                self.message = message
                status = self._classify(message)
                break
            self.nsteps += 1
            t_good = solver.t
            y_good[:] = solver.y
            h_max = max(h_max, solver.step_size)
            log.debug2("step %d to eta=%.17g", self.nsteps, t_good)

        self.nfev += solver.nfev
        self.njev += solver.njev
        self.nlu += solver.nlu
        if status == IntegratorStatus.SUCCESS:
            t_good = eta_target
            if h_max > 0.0:
                self.h = h_max
        f[:] = y_good
        return t_good, status


def advance(problem, tolerances, eta, eta_target, f, max_steps=MAXSTP):
    """One-shot ``Integrator(problem, tolerances).advance(eta, eta_target, f)``."""
    return Integrator(problem, tolerances, max_steps).advance(eta, eta_target, f)
