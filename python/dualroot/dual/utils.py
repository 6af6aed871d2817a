from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dualroot.dual.dual import (
    Dual,
    _base_real,
    _call,
    _one_like,
    _seed_tag,
    _tag_of,
    _zero_like,
)
from dualroot.errors import TE_RESULT_TAG

if TYPE_CHECKING:
    from dualroot.typing import Callable, Number

# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.

STATE_MAP = {
    1: ["SUCCESS", "`steps` completed"],
    3: ["SUCCESS", "closed form valid"],
    -1: ["FAILURE", "discriminant is negative"],
}


def _solver_result(
    state: int, i: int, func_val: Any, time: float, log: bool, algo: str
) -> dict[str, Any]:
    if log:
        print(
            f"{STATE_MAP[state][0]}: {STATE_MAP[state][1]} after {i} iterations "
            f"({algo}), `f_val`: {func_val}, "
            f"`time`: {time:.4f}s",
        )
    return {
        "status": STATE_MAP[state][0],
        "state": state,
        "g": func_val,
        "iterations": i,
        "time": time,
    }


def derivative(f: Callable[[Number], Number], x: Number) -> Number:
    """
    Return the exact first derivative of a function of one variable.

    Parameters
    ----------
    f: callable
        The function to differentiate, of the signature `f(x)`. It must be expressed with
        arithmetic operators and the ``dual_*`` elementary functions.
    x: float, int, mpf, Dual
        The point at which to evaluate the derivative.

    Returns
    -------
    float, mpf, Dual
        A value of the type of ``x``, or a *Dual* if ``f`` depends on the perturbation of an
        enclosing derivative.

    Notes
    -----
    The function is evaluated once at the seed :code:`Dual(x, 1)`. The seed has a fresh tag,
    greater than the tag of any other value, so if ``x`` is itself a *Dual*, or ``f`` closes
    over the seed of an enclosing derivative, those perturbations pass through unchanged and
    the result is the *Dual* manifold of the derivative.

    A function that does not depend on its argument has derivative zero.

    Examples
    --------
    .. ipython:: python

       from dualroot.dual import derivative, dual_sin

       derivative(lambda x: x * dual_sin(x), 2.0)
    """
    seed = Dual(x, _one_like(x), _seed_tag())
    result = f(seed)
    if isinstance(result, Dual) and result.tag == seed.tag:
        return result.dual
    elif _tag_of(result) > seed.tag:
        raise TypeError(TE_RESULT_TAG.format(_tag_of(result), seed.tag))
    return _zero_like(x)


def second_derivative(f: Callable[[Number], Number], x: Number) -> Number:
    """
    Return the exact second derivative of a function of one variable.

    Parameters
    ----------
    f: callable
        The function to differentiate, of the signature `f(x)`.
    x: float, int, mpf, Dual
        The point at which to evaluate the second derivative.

    Returns
    -------
    float, mpf, Dual

    Notes
    -----
    This is the derivative of the function :code:`y -> derivative(f, y)`. The inner
    :meth:`derivative` is seeded at a *Dual* and so evaluates ``f`` on a *Dual* of order two,
    whose two infinitesimals have distinct tags and are tracked independently.

    Examples
    --------
    .. ipython:: python

       from dualroot.dual import second_derivative, dual_exp

       second_derivative(lambda x: dual_exp(2 * x), 0.0)
    """
    return derivative(lambda y: derivative(f, y), x)


def dual_exp(x: Number) -> Number:
    """
    Calculate the exponential value of a regular int, float or mpf or a dual number.

    Parameters
    ----------
    x : int, float, mpf, Dual
        Value to calculate exponent of.

    Returns
    -------
    float, mpf, Dual
    """
    return _call("exp", x)


def dual_log(x: Number, base: int | None = None) -> Number:
    """
    Calculate the logarithm of a regular int, float or mpf or a dual number.

    Parameters
    ----------
    x : int, float, mpf, Dual
        Value to calculate the logarithm of. Must be positive.
    base : int, float, optional
        Base of the logarithm. Defaults to e to compute natural logarithm

    Returns
    -------
    float, mpf, Dual
    """
    val = _call("log", x)
    if base is None:
        return val
    # evaluate the log of the base in the scalar type of x to retain precision
    return val / _call("log", _one_like(_base_real(x)) * base)


def dual_sqrt(x: Number) -> Number:
    """
    Calculate the square root of a regular int, float or mpf or a dual number.

    Parameters
    ----------
    x : int, float, mpf, Dual
        A non-negative value. A *Dual* must have a positive real, since the derivative of the
        square root is infinite at zero.

    Returns
    -------
    float, mpf, Dual
    """
    return _call("sqrt", x)


def dual_sin(x: Number) -> Number:
    """Calculate the sine of a regular int, float or mpf or a dual number."""
    return _call("sin", x)


def dual_cos(x: Number) -> Number:
    """Calculate the cosine of a regular int, float or mpf or a dual number."""
    return _call("cos", x)


def dual_tan(x: Number) -> Number:
    """Calculate the tangent of a regular int, float or mpf or a dual number."""
    return _call("tan", x)


def dual_atan(x: Number) -> Number:
    """Calculate the inverse tangent of a regular int, float or mpf or a dual number."""
    return _call("atan", x)


def dual_sinh(x: Number) -> Number:
    return _call("sinh", x)


def dual_cosh(x: Number) -> Number:
    return _call("cosh", x)


def dual_tanh(x: Number) -> Number:
    return _call("tanh", x)


def dual_copysign(x: Number, sign: Number) -> Number:
    """
    Return the magnitude of ``x`` with the sign of ``sign``.

    Parameters
    ----------
    x : int, float, mpf, Dual
        The value supplying the magnitude.
    sign : int, float, mpf, Dual
        The value supplying the sign. Only its innermost real is inspected.

    Returns
    -------
    float, mpf, Dual

    Notes
    -----
    A zero ``sign``, including a float ``-0.0``, is treated as positive. This is consistent
    across scalar types, some of which have no signed zero. The sign is piecewise constant so
    it contributes nothing to the derivative.
    """
    magnitude = abs(x)
    return magnitude if _base_real(sign) >= 0 else -magnitude
