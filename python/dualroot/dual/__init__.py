from __future__ import annotations

from dualroot.dual.dual import Dual
from dualroot.dual.newton import (
    convergence_order,
    cubic_newton,
    cubic_newton_history,
    cubic_newton_step,
    newton_step,
)
from dualroot.dual.quadratic import discriminant, quadratic_eqn, quadratic_step
from dualroot.dual.utils import (
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
    second_derivative,
)

# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.

__all__ = [
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
    "discriminant",
    "quadratic_step",
    "quadratic_eqn",
    "newton_step",
    "cubic_newton_step",
    "cubic_newton",
    "cubic_newton_history",
    "convergence_order",
]
