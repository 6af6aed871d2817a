from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any

from dualroot import defaults
from dualroot.default import NoInput, _drb
from dualroot.dual.dual import _base_real
from dualroot.dual.utils import _solver_result, dual_copysign, dual_sqrt
from dualroot.errors import (
    DV_NEGATIVE_DISCRIMINANT,
    DV_QUADRATIC_EQN,
    SD_ZERO_DENOMINATOR,
    UW_STATIONARY_BRANCH,
    DivergenceError,
    SingularDerivativeError,
)

if TYPE_CHECKING:
    from dualroot.typing import Number

# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.


def discriminant(fx: Number, fx1: Number, fx2: Number) -> Number:
    """
    Return the discriminant, :math:`f'(x)^2 - 2f(x)f''(x)`, of the local quadratic model.

    Parameters
    ----------
    fx: float, mpf, Dual
        The function value.
    fx1: float, mpf, Dual
        The first derivative.
    fx2: float, mpf, Dual
        The second derivative.

    Returns
    -------
    float, mpf, Dual
    """
    return fx1 * fx1 - 2 * fx * fx2


def quadratic_step(fx: Number, fx1: Number, fx2: Number) -> Number:
    r"""
    Return the correction, :math:`\delta`, to the root of the local quadratic model nearest zero.

    Parameters
    ----------
    fx: float, mpf, Dual
        The function value, :math:`f(x)`.
    fx1: float, mpf, Dual
        The first derivative, :math:`f'(x)`.
    fx2: float, mpf, Dual
        The second derivative, :math:`f''(x)`.

    Returns
    -------
    float, mpf, Dual

    Raises
    ------
    DivergenceError
        If the discriminant is negative and the model has no real root.
    SingularDerivativeError
        If :math:`f'(x)` and the discriminant are both zero.

    Notes
    -----
    The quadratic model :math:`f(x) + f'(x)\delta + \frac{1}{2}f''(x)\delta^2 = 0` is divided
    by :math:`\delta^2` and solved for :math:`1/\delta`, giving

    .. math::

       \delta = \frac{-2f(x)}{f'(x) + \text{sign}(f'(x)) \sqrt{f'(x)^2 - 2f(x)f''(x)}}

    Matching the sign of the square root to :math:`f'(x)` maximises the magnitude of the
    denominator. This selects the smaller of the two roots, avoids cancellation, and is the
    Newton step, :math:`-f(x)/f'(x)`, in the limit :math:`f''(x) \rightarrow 0`.

    When :math:`f'(x)` is zero both roots have equal magnitude. The positive square root is used
    and a *UserWarning* is emitted.
    """
    d = discriminant(fx, fx1, fx2)
    if d < 0:
        raise DivergenceError(DV_NEGATIVE_DISCRIMINANT.format(d, fx, fx1, fx2))
    if _base_real(fx1) == 0:
        if _base_real(d) == 0:
            raise SingularDerivativeError(SD_ZERO_DENOMINATOR.format(fx, fx1, fx2))
        warnings.warn(UW_STATIONARY_BRANCH.format(d), UserWarning)

    denominator = fx1 + dual_copysign(dual_sqrt(d), fx1)
    if _base_real(denominator) == 0:
        raise SingularDerivativeError(SD_ZERO_DENOMINATOR.format(fx, fx1, fx2))
    return -2 * fx / denominator


def quadratic_eqn(
    a: Number,
    b: Number,
    c: Number,
    x0: Number,
    raise_on_fail: bool = True,
    tol: float | NoInput = NoInput(0),
) -> dict[str, Any]:
    """
    Solve the quadratic equation, :math:`ax^2 + bx +c = 0`, with error reporting.

    Parameters
    ----------
    a: float, mpf, Dual
        The *a* coefficient value.
    b: float, mpf, Dual
        The *b* coefficient value.
    c: float, mpf, Dual
        The *c* coefficient value.
    x0: float, mpf, Dual
        The expected solution to discriminate between two possible solutions.
    raise_on_fail: bool, optional
        Whether to raise if unsolved or return a solver result in failed state.
    tol: float, optional
        The absolute size of ``a`` below which the equation is solved as linear. Defaults to
        ``defaults.quadratic_tol``.

    Returns
    -------
    dict

    Notes
    -----
    The roots are obtained as :math:`q/a` and :math:`c/q` with
    :math:`q = -\\frac{1}{2}(b + \\text{sign}(b)\\sqrt{b^2-4ac})`, which does not lose precision
    by subtracting nearly equal values.

    If ``a`` is evaluated to be less than ``tol`` in absolute terms then it is treated as zero and
    the equation is solved as a linear equation in ``b`` and ``c`` only.

    Examples
    --------
    .. ipython:: python

       from dualroot.dual import quadratic_eqn

       quadratic_eqn(a=1.0, b=1.0, c=-6.0, x0=-2.9)

    """
    tol = _drb(defaults.quadratic_tol, tol)
    d = b**2 - 4 * a * c
    if d < 0.0:
        if raise_on_fail:
            raise DivergenceError(DV_QUADRATIC_EQN.format(d))
        else:
            return _solver_result(
                state=-1,
                i=0,
                func_val=float("nan"),
                time=0.0,
                log=True,
                algo="quadratic_eqn",
            )

    if abs(a) > tol:
        q = -(b + dual_copysign(dual_sqrt(d), b)) / 2
        _1 = q / a
        _2 = c / q if _base_real(q) != 0 else _1
        return _solver_result(
            state=3,
            i=1,
            func_val=_1 if abs(x0 - _1) < abs(x0 - _2) else _2,
            time=0.0,
            log=False,
            algo="quadratic_eqn",
        )
    else:
        # 'a' is considered too close to zero for the quadratic eqn, solve the linear eqn
        # to avoid division by zero errors
        return _solver_result(
            state=3,
            i=1,
            func_val=-c / b,
            time=0.0,
            log=False,
            algo="quadratic_eqn->linear_eqn",
        )
