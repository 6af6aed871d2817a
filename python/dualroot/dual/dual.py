from __future__ import annotations

import math
from itertools import count
from threading import Lock
from typing import TYPE_CHECKING, Any

import numpy as np
from mpmath.ctx_mp_python import _mpf

from dualroot.default import NoInput
from dualroot.errors import (
    DE_DIVISION_BY_ZERO,
    DE_LOG_NON_POSITIVE,
    DE_POW_NEGATIVE_BASE,
    DE_POW_ZERO_BASE,
    DE_RPOW_NON_POSITIVE_BASE,
    DE_SQRT_NEGATIVE,
    DE_SQRT_ZERO,
    TE_CANNOT_COMPARE,
    TE_TAG_ORDER,
    TE_UNSUPPORTED_OPERAND,
    VE_ATTRIBUTE_IS_IMMUTABLE,
    DomainError,
)

if TYPE_CHECKING:
    from dualroot.typing import Number, Scalar

FLOATS = (float, np.floating)
INTS = (int, np.integer)
MPFS = (_mpf,)
SCALARS = (*FLOATS, *INTS, *MPFS)

# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.


class Dual:
    """
    Dual number data type to perform forward mode automatic differentiation of one variable.

    Parameters
    ----------
    real : float, int, mpf, Dual
        The real coefficient of the dual number.
    dual : float, int, mpf, Dual, optional
        The coefficient of the infinitesimal, i.e. the derivative of ``real`` with respect to
        the independent variable. Defaults to the zero of the type of ``real``, in which case
        the dual number represents a constant.
    tag : tuple of int, optional
        Identifies the infinitesimal. Must be greater than the tags of ``real`` and ``dual``.
        Defaults to the level directly above the greatest tag of the components.

    Attributes
    ----------
    real : float, int, mpf, Dual
    dual : float, int, mpf, Dual
    tag : tuple of int
    order : int

    Notes
    -----
    A *Dual* is generic over its scalar type. When ``real`` or ``dual`` are themselves *Dual*
    the instance is nested and its ``order`` is one greater than the deepest of them.

    Every infinitesimal is identified by its ``tag``. Arithmetic between two *Dual* with the
    same ``tag`` combines their infinitesimals. An operand with a lesser ``tag``, or a plain
    scalar, is a constant with respect to the greater one. :meth:`~dualroot.dual.derivative`
    seeds each evaluation with a fresh tag, greater than any existing tag, so the perturbations
    of nested derivatives are never conflated, even when the seeds are built from the same
    scalar.

    Instances are immutable. Every operation returns a new *Dual*.

    Examples
    --------
    .. ipython:: python

       from dualroot.dual import Dual

       x = Dual(2.0, 1.0)
       x**3 + 1 / x
    """

    __slots__ = ("real", "dual", "tag", "order")

    real: Any
    dual: Any
    tag: tuple[int, int]
    order: int

    def __init__(
        self,
        real: Number,
        dual: Number | NoInput = NoInput(0),
        tag: tuple[int, int] | NoInput = NoInput(0),
    ) -> None:
        if not isinstance(real, (*SCALARS, Dual)):
            raise TypeError(TE_UNSUPPORTED_OPERAND.format(type(real).__name__))
        if isinstance(dual, NoInput):
            dual = _zero_like(real)
        elif not isinstance(dual, (*SCALARS, Dual)):
            raise TypeError(TE_UNSUPPORTED_OPERAND.format(type(dual).__name__))

        inner = max(_tag_of(real), _tag_of(dual))
        if isinstance(tag, NoInput):
            tag = (inner[0], inner[1] + 1)
        elif tag <= inner:
            raise TypeError(TE_TAG_ORDER.format(tag, inner))
        object.__setattr__(self, "real", real)
        object.__setattr__(self, "dual", dual)
        object.__setattr__(self, "tag", tag)
        object.__setattr__(self, "order", max(_order_of(real), _order_of(dual)) + 1)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(VE_ATTRIBUTE_IS_IMMUTABLE.format(name))

    def __delattr__(self, name: str) -> None:
        raise AttributeError(VE_ATTRIBUTE_IS_IMMUTABLE.format(name))

    def __repr__(self) -> str:
        return f"<Dual: {_fmt(self.real)}, [{_fmt(self.dual)}]>"

    def __str__(self) -> str:
        return f" val = {self.real}\n  dx = {self.dual}\n"

    def __float__(self) -> float:
        return float(_base_real(self))

    def __abs__(self) -> Dual:
        return -self if _base_real(self) < 0 else self

    def _new(self, real: Number, dual: Number) -> Dual:
        return Dual(real, dual, self.tag)

    def _is_same_level(self, argument: Any) -> bool:
        return isinstance(argument, Dual) and argument.tag == self.tag

    def _is_constant(self, argument: Any) -> bool:
        """Scalars and duals of a lesser tag carry no perturbation at the level of ``self``."""
        if isinstance(argument, Dual):
            return argument.tag < self.tag
        return isinstance(argument, SCALARS)

    def _defer(self, reflected: str, argument: Any) -> Any:
        if isinstance(argument, Dual):
            # argument has the greater tag so it determines the level of the result
            return getattr(argument, reflected)(self)
        elif isinstance(argument, np.ndarray):
            return NotImplemented
        raise TypeError(TE_UNSUPPORTED_OPERAND.format(type(argument).__name__))

    # Comparison

    def _comparable(self, argument: Any) -> Any:
        if not isinstance(argument, (*SCALARS, Dual)):
            raise TypeError(
                TE_CANNOT_COMPARE.format(type(self).__name__, type(argument).__name__)
            )
        return _base_real(argument)

    def __lt__(self, argument: Any) -> bool:
        """Compare an argument by evaluating the size of the innermost real."""
        return bool(_base_real(self) < self._comparable(argument))

    def __le__(self, argument: Any) -> bool:
        return bool(_base_real(self) <= self._comparable(argument))

    def __gt__(self, argument: Any) -> bool:
        """Compare an argument by evaluating the size of the innermost real."""
        return bool(_base_real(self) > self._comparable(argument))

    def __ge__(self, argument: Any) -> bool:
        return bool(_base_real(self) >= self._comparable(argument))

    def __eq__(self, argument: Any) -> bool:  # type: ignore[override]
        """Compare an argument with a Dual number for equality of all coefficients."""
        if isinstance(argument, NoInput):
            return False
        elif self._is_same_level(argument):
            return bool(self.real == argument.real and self.dual == argument.dual)
        elif self._is_constant(argument):
            return bool(self.real == argument and self.dual == 0)
        elif isinstance(argument, Dual):
            return argument == self
        raise TypeError(TE_CANNOT_COMPARE.format(type(self).__name__, type(argument).__name__))

    __hash__ = None  # type: ignore[assignment]

    # Arithmetic

    def __neg__(self) -> Dual:
        return self._new(-self.real, -self.dual)

    def __pos__(self) -> Dual:
        return self

    def __add__(self, argument: Any) -> Dual:
        if self._is_same_level(argument):
            return self._new(self.real + argument.real, self.dual + argument.dual)
        elif self._is_constant(argument):
            return self._new(self.real + argument, self.dual)
        return self._defer("__radd__", argument)

    __radd__ = __add__

    def __sub__(self, argument: Any) -> Dual:
        if self._is_same_level(argument):
            return self._new(self.real - argument.real, self.dual - argument.dual)
        elif self._is_constant(argument):
            return self._new(self.real - argument, self.dual)
        return self._defer("__rsub__", argument)

    def __rsub__(self, argument: Any) -> Dual:
        return -(self - argument)

    def __mul__(self, argument: Any) -> Dual:
        if self._is_same_level(argument):
            return self._new(
                self.real * argument.real,
                self.dual * argument.real + self.real * argument.dual,
            )
        elif self._is_constant(argument):
            return self._new(self.real * argument, self.dual * argument)
        return self._defer("__rmul__", argument)

    __rmul__ = __mul__

    def __truediv__(self, argument: Any) -> Dual:
        if self._is_same_level(argument):
            if _base_real(argument) == 0:
                raise DomainError(DE_DIVISION_BY_ZERO.format(self, argument))
            return self._new(
                self.real / argument.real,
                (self.dual * argument.real - self.real * argument.dual)
                / (argument.real * argument.real),
            )
        elif self._is_constant(argument):
            if _base_real(argument) == 0:
                raise DomainError(DE_DIVISION_BY_ZERO.format(self, argument))
            return self._new(self.real / argument, self.dual / argument)
        return self._defer("__rtruediv__", argument)

    def __rtruediv__(self, argument: Any) -> Dual:
        """x / z where x is a constant with respect to z"""
        if not self._is_constant(argument):
            return NotImplemented
        if _base_real(self) == 0:
            raise DomainError(DE_DIVISION_BY_ZERO.format(argument, self))
        quotient = argument / self.real
        return self._new(quotient, -quotient * self.dual / self.real)

    def __pow__(self, power: Any) -> Dual:
        if isinstance(power, Dual):
            if power.tag > self.tag:
                return power.__rpow__(self)
            return (power * self.log()).exp()
        elif not isinstance(power, SCALARS):
            return self._defer("__rpow__", power)

        base = _base_real(self)
        if power == 0:
            return self._new(self.real**power, self.dual * 0)
        elif not _is_integral(power) and base < 0:
            raise DomainError(DE_POW_NEGATIVE_BASE.format(base, power))
        elif base == 0 and power < 1:
            raise DomainError(DE_POW_ZERO_BASE.format(power))
        return self._new(self.real**power, self.dual * power * self.real ** (power - 1))

    def __rpow__(self, argument: Any) -> Dual:
        """x ** z where x is a constant with respect to z"""
        if not self._is_constant(argument):
            return NotImplemented
        if _base_real(argument) <= 0:
            raise DomainError(DE_RPOW_NON_POSITIVE_BASE.format(argument))
        return (self * _call("log", argument)).exp()

    # Elementary functions. Method names match the numpy ufuncs so that object arrays of Dual
    # can be passed to np.exp, np.sin, etc.

    def exp(self) -> Dual:
        const = _call("exp", self.real)
        return self._new(const, self.dual * const)

    def log(self) -> Dual:
        return self._new(_call("log", self.real), self.dual / self.real)

    def sqrt(self) -> Dual:
        if _base_real(self) == 0:
            raise DomainError(DE_SQRT_ZERO.format(self))
        root = _call("sqrt", self.real)
        return self._new(root, self.dual / (2 * root))

    def sin(self) -> Dual:
        return self._new(_call("sin", self.real), self.dual * _call("cos", self.real))

    def cos(self) -> Dual:
        return self._new(_call("cos", self.real), -_call("sin", self.real) * self.dual)

    def tan(self) -> Dual:
        tan = _call("tan", self.real)
        return self._new(tan, self.dual * (1 + tan * tan))

    def atan(self) -> Dual:
        return self._new(_call("atan", self.real), self.dual / (1 + self.real * self.real))

    arctan = atan

    def sinh(self) -> Dual:
        return self._new(_call("sinh", self.real), self.dual * _call("cosh", self.real))

    def cosh(self) -> Dual:
        return self._new(_call("cosh", self.real), self.dual * _call("sinh", self.real))

    def tanh(self) -> Dual:
        tanh = _call("tanh", self.real)
        return self._new(tanh, self.dual * (1 - tanh * tanh))


# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.


def _order_of(val: Any) -> int:
    """Get the nesting order of a value; plain scalars have order zero."""
    return val.order if isinstance(val, Dual) else 0


def _tag_of(val: Any) -> tuple[int, int]:
    """Get the perturbation tag of a value; plain scalars have the least tag."""
    return val.tag if isinstance(val, Dual) else (0, 0)


_SEEDS = count(1)
_SEEDS_LOCK = Lock()


def _seed_tag() -> tuple[int, int]:
    """Return a tag greater than any tag issued before."""
    with _SEEDS_LOCK:
        return (next(_SEEDS), 0)


def _base_real(val: Number) -> Scalar:
    """Return the innermost real component of a possibly nested Dual."""
    while isinstance(val, Dual):
        val = val.real
    return val


def _zero_like(val: Number) -> Number:
    if isinstance(val, Dual):
        return Dual(_zero_like(val.real), _zero_like(val.dual), val.tag)
    return type(val)(0)


def _one_like(val: Number) -> Number:
    if isinstance(val, Dual):
        return Dual(_one_like(val.real), _zero_like(val.dual), val.tag)
    return type(val)(1)


def _is_integral(val: Scalar) -> bool:
    if isinstance(val, INTS):
        return True
    return float(val).is_integer()


def _fmt(val: Number) -> str:
    if isinstance(val, Dual):
        return repr(val)
    return f"{float(val):,.6f}"


def _scalar_call(name: str, x: Scalar) -> Scalar:
    """
    Evaluate an elementary function on a plain scalar.

    mpmath numbers are evaluated in their own context so that their precision is preserved.
    Other scalars are evaluated with :mod:`math`.
    """
    if not isinstance(x, SCALARS):
        raise TypeError(TE_UNSUPPORTED_OPERAND.format(type(x).__name__))
    if name == "log" and x <= 0:
        raise DomainError(DE_LOG_NON_POSITIVE.format(x))
    elif name == "sqrt" and x < 0:
        raise DomainError(DE_SQRT_NEGATIVE.format(x))

    if isinstance(x, MPFS):
        return getattr(x.context, name)(x)
    return getattr(math, name)(x)  # type: ignore[no-any-return]


def _call(name: str, x: Number) -> Number:
    """Dispatch an elementary function to a Dual method or to the scalar implementation."""
    if isinstance(x, Dual):
        return getattr(x, name)()  # type: ignore[no-any-return]
    return _scalar_call(name, x)
