"""
Command-line driver: integrate the Blasius equation and print the profile.

    blasius [boundary [interval [tolerance]]] [--implicit] [--params FILE]

Prints a header and one row ``eta f fp fpp`` per checkpoint to stdout.
On integrator failure a single diagnostic line goes to stderr and the
process exits with the failure's status code.

Tolerance is not to be trusted blindly: Blasius is notoriously sensitive
to rounding, so the defaults ask for machine precision.
"""

import argparse
import sys

from blasiussuite.core.blasius import blasius_jacobian, blasius_rhs, reverse
from blasiussuite.core.constants import initial_state
from blasiussuite.libblasius import logger
from blasiussuite.libblasius.integrator import (
    ConfigurationError,
    ExplicitScheme,
    ImplicitScheme,
    Integrator,
    IntegratorStatus,
    Problem,
    strerror,
)
from blasiussuite.libblasius.params import ReadRunParams, RunParams, WriteRunParams
from blasiussuite.libblasius.reporter import integrate_regular

log = logger.get_logger(__name__)

COLUMNS = ("eta", "f", "fp", "fpp")


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
def write_header(out):
    out.write("  ".join(f"{name:>22s}" for name in COLUMNS) + "\n")


def write_row(out, eta, f):
    out.write(f"{eta:22.16e}  {f[0]:22.16e}  {f[1]:22.16e}  {f[2]:22.16e}\n")


# ---------------------------------------------------------------------------
# Problem assembly
# ---------------------------------------------------------------------------
def build_problem(params):
    """Return the ``Problem`` for validated ``params``."""
    if params.scheme == "implicit":
        return Problem(blasius_rhs, ImplicitScheme(blasius_jacobian))
    rhs = blasius_rhs if params.direction > 0 else reverse(blasius_rhs)
    return Problem(rhs, ExplicitScheme())


def run(params, out=None, err=None):
    """
    Integrate from the initial condition to ``params.boundary``.

    Returns
    -------
    IntegratorStatus
        ``SUCCESS`` when the whole domain was covered.
    """
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr

    params.validate()
    problem = build_problem(params)
    integrator = Integrator(problem, params.tolerances, params.max_steps)
    direction = params.direction

    log.info(
        "Integrating to eta=%g every %g with tolerance %g (%s scheme)",
        params.boundary, params.interval, params.tolerance, params.scheme,
    )

    def emit(eta, f):
        # 0.0 + keeps the first backward row from printing as -0.0
        write_row(out, 0.0 + direction * eta, f)

    f = initial_state()
    write_header(out)
    eta, status = integrate_regular(integrator, f, params.boundary, params.interval, emit)

    if status != IntegratorStatus.SUCCESS:
        err.write(
            f"At {0.0 + direction * eta:g} encountered error {int(status)}: {strerror(status)}\n"
        )
        log.debug("Solver message: %s", integrator.message)
    log.info(
        "%d steps, %d function evaluations, %d Jacobian evaluations, %d LU decompositions",
        integrator.nsteps, integrator.nfev, integrator.njev, integrator.nlu,
    )
    return status


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------
def _parser():
    p = argparse.ArgumentParser(
        prog="blasius",
        description="Integrate the Blasius boundary-layer equation outward from eta=0.",
    )
    p.add_argument("boundary", nargs="?", type=float,
                   help="target eta; negative integrates backward (default 8.8)")
    p.add_argument("interval", nargs="?", type=float,
                   help="output interval in eta (default 0.2)")
    p.add_argument("tolerance", nargs="?", type=float,
                   help="error tolerance (default machine epsilon)")
    scheme = p.add_mutually_exclusive_group()
    scheme.add_argument("--implicit", dest="scheme", action="store_const", const="implicit",
                        help="implicit Radau stepping with the analytic Jacobian")
    scheme.add_argument("--explicit", dest="scheme", action="store_const", const="explicit",
                        help="explicit DOP853 stepping (default)")
    p.add_argument("--max-steps", type=int, help="ceiling on internal solver steps")
    p.add_argument("--params", metavar="FILE", help="read boundary, interval, tolerance from FILE")
    p.add_argument("--save-params", metavar="FILE", help="record the effective parameters to FILE")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="more logging (repeat for more)")
    return p


def parse_params(args):
    """Merge defaults, ``--params`` file and command-line values."""
    params = RunParams()
    if args.params:
        params = ReadRunParams(args.params, params)
    return params.updated(
        boundary=args.boundary,
        interval=args.interval,
        tolerance=args.tolerance,
        scheme=args.scheme,
        max_steps=args.max_steps,
    )


def main(argv=None):
    """Console entry point.  Returns the process exit status."""
    args = _parser().parse_args(argv)
    logger.setup(logger.verbosity_level(args.verbose))

    try:
        params = parse_params(args).validate()
        if args.save_params:
            WriteRunParams(args.save_params, params)
        status = run(params)
    except ConfigurationError as exc:
        log.error("%s", exc)
        return int(exc.status)
    except OSError as exc:
        log.error("%s", exc)
        return int(IntegratorStatus.EINVAL)
    sys.stdout.flush()
    return int(status)
