__docformat__ = "restructuredtext"

# Let users know if they're missing any of our hard dependencies
_hard_dependencies = ("pandas", "numpy", "mpmath")
_missing_dependencies = []

for _dependency in _hard_dependencies:
    try:
        __import__(_dependency)
    except ImportError as _e:  # pragma: no cover
        raise ImportError(f"`dualroot` requires installation of {_dependency}: {_e}")

from dualroot.default import Defaults, NoInput

defaults = Defaults()

from contextlib import ContextDecorator


class default_context(ContextDecorator):
    """
    Context manager to temporarily set options in the `with` statement context.

    You need to invoke as ``default_context(pat, val, [(pat, val), ...])``.

    Examples
    --------
    >>> with default_context("cubic_newton_steps", 8, "mp_dps", 100):
    ...     pass
    """

    def __init__(self, *args) -> None:
        if len(args) % 2 != 0 or len(args) < 2:
            raise ValueError("Need to invoke as default_context(pat, val, [(pat, val), ...]).")

        self.ops = list(zip(args[::2], args[1::2]))

    def __enter__(self) -> None:
        self.undo = [(pat, getattr(defaults, pat, None)) for pat, _ in self.ops]

        for pat, val in self.ops:
            setattr(defaults, pat, val)

    def __exit__(self, *args) -> None:
        if self.undo:
            for pat, val in self.undo:
                setattr(defaults, pat, val)


from dualroot.dual import (
    Dual,
    convergence_order,
    cubic_newton,
    cubic_newton_history,
    cubic_newton_step,
    derivative,
    dual_atan,
    dual_copysign,
    dual_cos,
    dual_cosh,
    dual_exp,
    dual_log,
    dual_sin,
    dual_sinh,
    dual_sqrt,
    dual_tan,
    dual_tanh,
    newton_step,
    second_derivative,
)
from dualroot.errors import (
    DivergenceError,
    DomainError,
    DualRootError,
    SingularDerivativeError,
)
from dualroot.precision import mp_context, mp_real

# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.

__all__ = [
    "defaults",
    "default_context",
    "NoInput",
    # dual
    "Dual",
    "derivative",
    "second_derivative",
    "dual_exp",
    "dual_log",
    "dual_sqrt",
    "dual_sin",
    "dual_cos",
    "dual_tan",
    "dual_atan",
    "dual_sinh",
    "dual_cosh",
    "dual_tanh",
    "dual_copysign",
    # newton
    "newton_step",
    "cubic_newton_step",
    "cubic_newton",
    "cubic_newton_history",
    "convergence_order",
    # precision
    "mp_context",
    "mp_real",
    # errors
    "DualRootError",
    "DomainError",
    "DivergenceError",
    "SingularDerivativeError",
]

__version__ = "0.1.0"
