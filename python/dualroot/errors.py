# Licence: Creative Commons - Attribution-NonCommercial-NoDerivatives 4.0 International
# Commercial use of this code, and/or copying and redistribution is prohibited.
# Contact rateslib at gmail.com if this code is observed outside its intended sphere.


class DualRootError(Exception):
    """Base class for the numerical failures raised by *dualroot*."""


class DomainError(DualRootError, ValueError):
    """
    An elementary operation was evaluated outside of its real domain, or at a point where it
    has no finite derivative, e.g. division by zero or the square root of a negative number.
    """


class DivergenceError(DualRootError, ArithmeticError):
    """
    The local quadratic model has no real root, i.e. its discriminant is negative.
    """


class SingularDerivativeError(DualRootError, ZeroDivisionError):
    """
    The denominator of an iteration step vanished, e.g. at a stationary point of the function.
    """


# Dual arithmetic

TE_UNSUPPORTED_OPERAND = (
    "Dual operations defined between int, float, mpf or Dual, got: {0}."
)

TE_CANNOT_COMPARE = "Cannot compare {0} with incompatible type: {1}."

TE_TAG_ORDER = (
    "The tag of a Dual must be greater than the tags of its `real` and `dual` components.\n"
    "Got tag {0} over components of tag {1}."
)

TE_RESULT_TAG = (
    "The differentiated function returned a Dual with a newer tag ({0}) than its seed ({1}).\n"
    "This happens when the function builds a Dual on top of its argument, or returns the seed of "
    "a derivative evaluated inside it."
)

VE_ATTRIBUTE_IS_IMMUTABLE = (
    "The '{}' attribute is immutable to avoid conflicting calculations. Re-initialize the instance."
)

# Domain violations

DE_DIVISION_BY_ZERO = "Division by a value with zero real component is undefined: got {0} / {1}."

DE_LOG_NON_POSITIVE = "The logarithm is only defined for positive values: got {0}."

DE_SQRT_NEGATIVE = "The square root is only defined for non-negative values: got {0}."

DE_SQRT_ZERO = "The square root has no finite derivative at zero: got {0}."

DE_POW_NEGATIVE_BASE = (
    "A negative base raised to the non-integer power {1} is not real: got base {0}."
)

DE_POW_ZERO_BASE = (
    "Zero raised to the power {0} has no finite value or derivative."
)

DE_RPOW_NON_POSITIVE_BASE = (
    "A Dual exponent requires a positive base to remain differentiable: got base {0}."
)

# Iteration

VE_STEPS = "`steps` must be a non-negative integer, got: {0}."

VE_DPS = "`dps` must be a positive integer number of decimal digits, got: {0}."

DV_QUADRATIC_EQN = "`quadratic_eqn` has failed to solve: discriminant {0} is less than zero."

DV_NEGATIVE_DISCRIMINANT = (
    "The local quadratic model has no real root: discriminant {0} is less than zero.\n"
    "f(x): {1}\nf'(x): {2}\nf''(x): {3}\n"
    "The initial guess is likely too far from a root for the quadratic model to be valid."
)

SD_ZERO_DENOMINATOR = (
    "The step denominator is zero: f'(x) and the square root of the discriminant both vanish.\n"
    "f(x): {0}\nf'(x): {1}\nf''(x): {2}"
)

SD_ZERO_DERIVATIVE = "The first derivative is zero at x: {0}, and a Newton step is undefined."

UW_STATIONARY_BRANCH = (
    "f'(x) is zero with a non-zero discriminant, {0}, so both roots of the quadratic model are "
    "equidistant.\nThe root obtained with a positive square root has been selected."
)
