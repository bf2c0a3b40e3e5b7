"""
Regular-interval reporting on top of an adaptive integrator.

The integrator chooses its own internal steps; the reporter only asks it
to reach evenly spaced checkpoints and emits the state at each one.  The
n-th checkpoint is computed from the counter as ``min(|B|, n * delta)``
and never by summing ``delta`` repeatedly, which would drift by one
rounding error per checkpoint.
"""

from blasiussuite.core.constants import ETA0
from .integrator import ConfigurationError, IntegratorStatus
from .logger import get_logger

log = get_logger(__name__)


def checkpoint(n, boundary, interval):
    """Position of the n-th checkpoint, clamped to ``|boundary|``."""
    return min(abs(boundary), n * interval)


def integrate_regular(integrator, f, boundary, interval, emit, eta=ETA0):
    """
    Drive ``integrator`` to ``|boundary|`` and emit the state at checkpoints.

    Parameters
    ----------
    integrator : Integrator
        Anything with ``advance(eta, eta_target, f) -> (eta, status)``.
    f : ndarray
        State vector, advanced in-place.
    boundary : float
        Target position; only its magnitude is used here.
    interval : float
        Checkpoint spacing, positive.
    emit : callable(eta, f)
        Called for the initial condition and after every successful advance.
    eta : float
        Starting position in the integrator's coordinate.

    Returns
    -------
    eta : float
        Last valid position.
    status : IntegratorStatus
        ``SUCCESS`` once ``|boundary|`` is reached, otherwise the first
        failure; rows emitted before the failure stand.
    """
    if not interval > 0.0:
        raise ConfigurationError(f"Output interval must be positive, got {interval!r}")
    end = abs(boundary)
    emit(eta, f)

    n = 0
    while eta < end:
        n += 1
        target = checkpoint(n, boundary, interval)
        if target <= eta:
            continue
        log.debug("checkpoint %d: advancing %.17g -> %.17g", n, eta, target)
        eta, status = integrator.advance(eta, target, f)
        if status != IntegratorStatus.SUCCESS:
            return eta, status
        emit(eta, f)

    return eta, IntegratorStatus.SUCCESS
