"""
Blasius equation as a first-order system.

The third-order similarity equation

    f''' = -f f'' / 2

is reduced to three first-order equations in the state
``y = (f, f', f'')``:

    dy0/deta = y1
    dy1/deta = y2
    dy2/deta = -y0 * y2 / 2

The equation is autonomous; ``eta`` is accepted everywhere only to match
the ``fun(t, y)`` calling convention of the integrators.
"""

import numpy as np

from .constants import NDIM


def blasius_rhs(eta, f, df=None):
    """
    Evaluate the Blasius right-hand side.

    Parameters
    ----------
    eta : float
        Similarity coordinate (unused).
    f : array_like, shape (3,)
        State ``(f, f', f'')``.
    df : ndarray, shape (3,), optional
        Output buffer.  Allocated when omitted.

    Returns
    -------
    df : ndarray, shape (3,)
        Derivative of the state with respect to ``eta``.
    """
    if df is None:
        df = np.empty(NDIM, dtype=np.float64)
    df[0] = f[1]
    df[1] = f[2]
    df[2] = -f[0] * f[2] / 2
    return df


def blasius_jacobian(eta, f, dfdy=None, df=None):
    """
    Evaluate the Blasius Jacobian and, alongside it, the right-hand side.

    ``dfdy[i, j]`` is the derivative of ``d(y_i)/deta`` with respect to
    ``y_j``.  Only the last row depends on the state.

    Returns
    -------
    dfdy : ndarray, shape (3, 3)
    df : ndarray, shape (3,)
    """
    if dfdy is None:
        dfdy = np.empty((NDIM, NDIM), dtype=np.float64)
    dfdy[0, 0] = 0.0
    dfdy[0, 1] = 1.0
    dfdy[0, 2] = 0.0
    dfdy[1, 0] = 0.0
    dfdy[1, 1] = 0.0
    dfdy[1, 2] = 1.0
    dfdy[2, 0] = -f[2] / 2
    dfdy[2, 1] = 0.0
    dfdy[2, 2] = -f[0] / 2

    return dfdy, blasius_rhs(eta, f, df)


def reverse(rhs):
    """
    Wrap ``rhs`` so that forward integration solves the backward problem.

    With ``s = -eta`` the state obeys ``dy/ds = -rhs(-s, y)``.  Integrating
    the returned function forward from ``s = 0`` to ``s = |B|`` yields the
    solution of the original system at ``eta = -s``; callers negate the
    reported position.  ``reverse(reverse(rhs))`` evaluates exactly as
    ``rhs``.
    """
    def reversed_rhs(eta, f, df=None):
        df = rhs(-eta, f, df)
        np.negative(df, out=df)
        return df

    reversed_rhs.__wrapped__ = rhs
    return reversed_rhs
