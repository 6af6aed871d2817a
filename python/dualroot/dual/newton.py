from __future__ import annotations

import math
from time import time
from typing import TYPE_CHECKING, Any

from pandas import DataFrame, RangeIndex, Series

from dualroot import defaults
from dualroot.default import NoInput, _drb
from dualroot.dual.dual import INTS, _base_real
from dualroot.dual.quadratic import discriminant, quadratic_step
from dualroot.dual.utils import (
    _solver_result,
    derivative,
    dual_log,
    second_derivative,
)
from dualroot.errors import SD_ZERO_DERIVATIVE, VE_STEPS, SingularDerivativeError

if TYPE_CHECKING:
    from dualroot.typing import Callable, Number, Sequence

# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.


def _validate_steps(steps: Any) -> int:
    if isinstance(steps, bool) or not isinstance(steps, INTS) or steps < 0:
        raise ValueError(VE_STEPS.format(steps))
    return int(steps)


def newton_step(f: Callable[[Number], Number], x: Number) -> Number:
    """
    Return the ordinary, first order, Newton-Raphson correction :math:`-f(x)/f'(x)`.

    Parameters
    ----------
    f: callable
        The function to find the root of, of the signature `f(x)`.
    x: float, int, mpf, Dual
        The current estimate of the root.

    Returns
    -------
    float, mpf, Dual

    Raises
    ------
    SingularDerivativeError
        If the derivative of ``f`` is zero at ``x``.
    """
    fx1 = derivative(f, x)
    if _base_real(fx1) == 0:
        raise SingularDerivativeError(SD_ZERO_DERIVATIVE.format(x))
    return -f(x) / fx1


def _cubic_newton_terms(
    f: Callable[[Number], Number], x: Number
) -> tuple[Number, Number, Number]:
    return f(x), derivative(f, x), second_derivative(f, x)


def cubic_newton_step(f: Callable[[Number], Number], x: Number) -> Number:
    """
    Return the correction to ``x`` made by one step of :meth:`cubic_newton`.

    Parameters
    ----------
    f: callable
        The function to find the root of, of the signature `f(x)`.
    x: float, int, mpf, Dual
        The current estimate of the root.

    Returns
    -------
    float, mpf, Dual

    See Also
    --------
    quadratic_step: The correction computed from function value and derivatives.
    """
    return quadratic_step(*_cubic_newton_terms(f, x))


def cubic_newton(
    f: Callable[[Number], Number],
    x0: Number,
    steps: int | NoInput = NoInput(0),
    log: bool = False,
) -> Number:
    """
    Use a cubically convergent Newton method to determine the root of a function of **one**
    variable.

    Parameters
    ----------
    f: callable
        The function, *f*, to find the root of. Of the signature: `f(x)`. It must be expressed
        with arithmetic operators and the ``dual_*`` elementary functions so that its
        derivatives can be determined by automatic differentiation.
    x0: float, int, mpf, Dual
        Initial guess of the root. Should be reasonable to avoid failure.
    steps: int, optional
        The exact number of iterations to perform. Defaults to ``defaults.cubic_newton_steps``.
    log: bool, optional
        Whether to print a summary of the iteration on completion.

    Returns
    -------
    float, mpf, Dual
        The estimate after ``steps`` iterations, of the same type as ``x0``.

    Raises
    ------
    DivergenceError
        If the local quadratic model at some iterate has no real root.
    SingularDerivativeError
        If the step denominator vanishes at some iterate.
    DomainError
        If ``f`` is evaluated outside of its domain.

    Notes
    -----
    Each iteration evaluates :math:`f(x)`, :math:`f'(x)` and :math:`f''(x)` and moves to the
    root of the local quadratic model closest to :math:`x`, see :meth:`quadratic_step`. The
    number of correct digits roughly triples with each iteration, compared with doubling for
    the ordinary Newton-Raphson method.

    There is no convergence test. Exactly ``steps`` iterations are performed and ``steps=0``
    returns ``x0``. A failure at any iteration is raised immediately, and no partial estimate is
    returned. A caller needing the last valid estimate should iterate with
    :meth:`cubic_newton_step` or inspect :meth:`cubic_newton_history`.

    Examples
    --------
    Find the fixed point of the cosine, i.e. the root of :math:`f(x) = \\cos(x) - x`.

    .. ipython:: python

       from dualroot.dual import cubic_newton, dual_cos

       cubic_newton(lambda x: dual_cos(x) - x, 1.0, steps=3)
    """
    steps = _validate_steps(_drb(defaults.cubic_newton_steps, steps))
    t0 = time()
    x = x0
    for _ in range(steps):
        x = x + cubic_newton_step(f, x)

    if log:
        _solver_result(1, steps, f(x), time() - t0, log=True, algo="cubic_newton")
    return x


def cubic_newton_history(
    f: Callable[[Number], Number],
    x0: Number,
    steps: int | NoInput = NoInput(0),
) -> DataFrame:
    """
    Perform :meth:`cubic_newton` and return a table of every iterate.

    Parameters
    ----------
    f: callable
        The function to find the root of, of the signature `f(x)`.
    x0: float, int, mpf, Dual
        Initial guess of the root.
    steps: int, optional
        The exact number of iterations to perform. Defaults to ``defaults.cubic_newton_steps``.

    Returns
    -------
    DataFrame
        Indexed by iteration, with ``steps + 1`` rows. The columns are the iterate, the function
        value, its first and second derivatives, the discriminant and the step taken from that
        iterate. The final row has no step. Column names are taken from ``defaults.headers``.

    Notes
    -----
    Values are stored with the type they are calculated in, so arbitrary precision iterates
    retain their precision.
    """
    steps = _validate_steps(_drb(defaults.cubic_newton_steps, steps))
    headers = defaults.headers

    rows = []
    x = x0
    for i in range(steps + 1):
        fx, fx1, fx2 = _cubic_newton_terms(f, x)
        step = None if i == steps else quadratic_step(fx, fx1, fx2)
        rows.append([x, fx, fx1, fx2, discriminant(fx, fx1, fx2), step])
        if step is not None:
            x = x + step

    return DataFrame(
        rows,
        columns=[headers[k] for k in ["x", "f", "f1", "f2", "discriminant", "step"]],
        index=RangeIndex(steps + 1, name=headers["iteration"]),
    )


def _log10_residual(residual: Number) -> float:
    residual = abs(residual)
    if residual == 0 or residual >= 1:
        return math.nan
    return float(dual_log(residual, 10))


def convergence_order(residuals: Sequence[Number]) -> Series:
    """
    Estimate the order of convergence from a sequence of residuals.

    Parameters
    ----------
    residuals: Sequence of float, mpf
        The function values, :math:`f(x_k)`, of successive iterates.

    Returns
    -------
    Series
        Indexed from 1, with value :math:`\\log_{10}|f(x_k)| / \\log_{10}|f(x_{k-1})|` at *k*.

    Notes
    -----
    A residual which is zero or not less than one in magnitude has no meaningful logarithmic
    ratio and yields *NaN*. For a method of order *p* the values approach *p* until the
    residuals reach the precision of the scalar type.
    """
    logs = [_log10_residual(_) for _ in residuals]
    ratios = [
        math.nan if math.isnan(a) or math.isnan(b) else b / a
        for a, b in zip(logs[:-1], logs[1:], strict=True)
    ]
    return Series(
        ratios,
        index=RangeIndex(1, len(logs)),
        name=defaults.headers["order"],
        dtype=float,
    )
