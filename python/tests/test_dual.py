import math

import numpy as np
import pytest
from dualroot import NoInput
from dualroot.dual import (
    Dual,
    dual_copysign,
    dual_exp,
    dual_log,
    dual_sqrt,
)
from dualroot.errors import DomainError


@pytest.fixture()
def x_1():
    return Dual(2.0, 1.0)


@pytest.fixture()
def x_2():
    return Dual(3.0, 2.0)


@pytest.fixture()
def y_1():
    # a second order seed at 3.0
    return Dual(Dual(3.0, 1.0), Dual(1.0, 0.0))


def test_zero_init() -> None:
    x = Dual(1.5)
    assert x.dual == 0.0
    assert x.order == 1

    y = Dual(Dual(1.5, 1.0))
    assert y.dual == Dual(0.0, 0.0)
    assert y.order == 2


def test_default_tag() -> None:
    x = Dual(2.0, 1.0)
    assert x.tag == (0, 1)
    assert Dual(x, Dual(1.0, 0.0)).tag == (0, 2)


def test_tag_not_above_components_raises() -> None:
    x = Dual(2.0, 1.0, tag=(3, 0))
    with pytest.raises(TypeError, match="must be greater than the tags"):
        Dual(x, 0.0, tag=(2, 0))
    with pytest.raises(TypeError, match="must be greater than the tags"):
        Dual(x, 0.0, tag=(3, 0))


def test_mixed_component_orders() -> None:
    x = Dual(Dual(2.0, 1.0), 1.0, tag=(5, 0))
    assert x.order == 2
    assert float(x) == 2.0


def test_different_tags_are_independent() -> None:
    # same structure, different infinitesimals
    x = Dual(2.0, 1.0, tag=(7, 0))
    y = Dual(3.0, 1.0, tag=(8, 0))
    result = x * y
    assert result.tag == (8, 0)
    assert result.real == Dual(6.0, 3.0, tag=(7, 0))
    assert result.dual == Dual(2.0, 1.0, tag=(7, 0))
    assert x * y == y * x


def test_tag_preserved_by_operations() -> None:
    x = Dual(2.0, 1.0, tag=(4, 0))
    assert (x + 1).tag == (4, 0)
    assert (2 / x).tag == (4, 0)
    assert dual_exp(x).tag == (4, 0)
    assert (x**2).tag == (4, 0)


@pytest.mark.parametrize("val", ["1.0", [1.0], None])
def test_unsupported_component_raises(val) -> None:
    with pytest.raises(TypeError, match="Dual operations defined between"):
        Dual(val)


@pytest.mark.parametrize("attr", ["real", "dual", "order"])
def test_dual_immutable_attributes(x_1, attr) -> None:
    with pytest.raises(AttributeError, match="immutable"):
        setattr(x_1, attr, 5.0)


@pytest.mark.parametrize("op", ["__add__", "__sub__", "__mul__", "__truediv__"])
def test_dual_immutable(x_1, x_2, op) -> None:
    _ = getattr(x_1, op)(x_2)
    assert x_1 == Dual(2.0, 1.0)
    assert x_2 == Dual(3.0, 2.0)


def test_dual_repr(x_1, y_1) -> None:
    assert repr(x_1) == "<Dual: 2.000000, [1.000000]>"
    expected = "<Dual: <Dual: 3.000000, [1.000000]>, [<Dual: 1.000000, [0.000000]>]>"
    assert repr(y_1) == expected


def test_dual_str(x_1) -> None:
    assert str(x_1) == " val = 2.0\n  dx = 1.0\n"


@pytest.mark.parametrize(
    ("op", "expected"),
    [
        ("__add__", Dual(5.0, 3.0)),
        ("__sub__", Dual(-1.0, -1.0)),
        ("__mul__", Dual(6.0, 7.0)),
        ("__truediv__", Dual(2.0 / 3.0, -1.0 / 9.0)),
    ],
)
def test_ops(x_1, x_2, op, expected) -> None:
    result = getattr(x_1, op)(x_2)
    assert result == expected


def test_op_inversions(x_1, x_2) -> None:
    assert (x_1 + x_2) - (x_2 + x_1) == 0
    result = (x_1 / x_2) * (x_2 / x_1)
    assert result.real == pytest.approx(1.0)
    assert result.dual == pytest.approx(0.0)


@pytest.mark.parametrize(
    ("op", "expected"),
    [
        ("__add__", Dual(4.5, 1.0)),
        ("__sub__", Dual(-0.5, 1.0)),
        ("__mul__", Dual(5.0, 2.5)),
        ("__truediv__", Dual(0.8, 0.4)),
    ],
)
def test_left_op_with_float(x_1, op, expected) -> None:
    result = getattr(x_1, op)(2.5)
    assert result == expected


def test_right_op_with_float(x_1) -> None:
    assert 2.5 + x_1 == Dual(4.5, 1.0)
    assert 2.5 - x_1 == Dual(0.5, -1.0)
    assert 2.5 * x_1 == Dual(5.0, 2.5)
    assert 3.0 / x_1 == Dual(1.5, -0.75)


def test_op_with_int(x_1) -> None:
    assert x_1 + 1 == Dual(3.0, 1.0)
    assert 2 * x_1 == Dual(4.0, 2.0)


@pytest.mark.parametrize("other", ["a", [1.0], (1.0,)])
def test_ops_raise_on_unsupported_type(x_1, other) -> None:
    with pytest.raises(TypeError):
        x_1 + other
    with pytest.raises(TypeError):
        x_1 * other
    with pytest.raises(TypeError):
        x_1 / other


def test_neg_and_pos(x_1) -> None:
    assert -x_1 == Dual(-2.0, -1.0)
    assert +x_1 is x_1


def test_abs() -> None:
    assert abs(Dual(-2.0, 1.0)) == Dual(2.0, -1.0)
    assert abs(Dual(2.0, 1.0)) == Dual(2.0, 1.0)


def test_float(y_1) -> None:
    assert float(Dual(2.5, 1.0)) == 2.5
    assert float(y_1) == 3.0


def test_eq_ne(x_1) -> None:
    assert Dual(2.0, 0.0) == 2.0
    assert x_1 != 2.0
    assert x_1 == Dual(2.0, 1.0)
    assert x_1 != Dual(2.0, 2.0)
    assert not x_1 == NoInput(0)


def test_eq_raises(x_1) -> None:
    with pytest.raises(TypeError, match="Cannot compare"):
        assert x_1 == "2.0"


def test_lt_gt(x_1, x_2) -> None:
    assert x_1 < x_2
    assert x_1 < 10
    assert not x_1 < 0
    assert x_2 > x_1
    assert x_1 > 1.5
    assert x_1 <= 2.0
    assert x_1 >= 2.0


def test_comparison_uses_innermost_real(x_1, y_1) -> None:
    assert y_1 > x_1
    assert x_1 < y_1
    assert y_1 >= 3


def test_lt_raises(x_1) -> None:
    with pytest.raises(TypeError, match="Cannot compare"):
        assert x_1 < "3"


@pytest.mark.parametrize(
    ("power", "expected"),
    [
        (0, (1, 0)),
        (1, (2, 1)),
        (2, (4, 4)),
        (3, (8, 12)),
        (-1, (0.5, -0.25)),
        (0.5, (2**0.5, 0.5 * 2**-0.5)),
    ],
)
def test_dual_power_1d(power, expected) -> None:
    x = Dual(2.0, 1.0)
    result = x**power
    assert result.real == pytest.approx(expected[0])
    assert result.dual == pytest.approx(expected[1])


def test_dual_power_negative_base_integer() -> None:
    result = Dual(-2.0, 1.0) ** 3
    assert result == Dual(-8.0, 12.0)


def test_dual_power_dual(x_1, x_2) -> None:
    result = x_1**x_2
    assert result.real == pytest.approx(8.0)
    # d(x^y) = y x^(y-1) dx + x^y ln(x) dy
    assert result.dual == pytest.approx(3 * 4.0 * 1.0 + 8.0 * math.log(2.0) * 2.0)


def test_dual_rpow(x_1) -> None:
    result = 3.0**x_1
    assert result.real == pytest.approx(9.0)
    assert result.dual == pytest.approx(9.0 * math.log(3.0))


def test_dual_exp_log() -> None:
    x = Dual(2.0, 1.0)
    assert dual_exp(x) == Dual(math.exp(2.0), math.exp(2.0))
    assert dual_log(x) == Dual(math.log(2.0), 0.5)
    z = dual_exp(dual_log(x))
    assert z.real == pytest.approx(2.0)
    assert z.dual == pytest.approx(1.0)


def test_dual_log_base() -> None:
    result = dual_log(Dual(100.0, 1.0), base=10)
    assert result.real == pytest.approx(2.0)
    assert result.dual == pytest.approx(1 / (100.0 * math.log(10)))
    assert dual_log(1000.0, 10) == pytest.approx(3.0)


def test_scalar_functions_return_scalars() -> None:
    assert dual_exp(1.0) == math.exp(1.0)
    assert dual_sqrt(4.0) == 2.0
    assert dual_log(math.e) == pytest.approx(1.0)


@pytest.mark.parametrize(
    ("x", "sign", "expected"),
    [
        (2.0, -1.0, -2.0),
        (-2.0, 1.0, 2.0),
        (-2.0, 0.0, 2.0),
        (-2.0, -0.0, 2.0),
        (Dual(2.0, 1.0), -3.0, Dual(-2.0, -1.0)),
        (Dual(-2.0, 1.0), Dual(5.0, 1.0), Dual(2.0, -1.0)),
    ],
)
def test_dual_copysign(x, sign, expected) -> None:
    assert dual_copysign(x, sign) == expected


class TestDomain:
    def test_division_by_zero_dual(self, x_1) -> None:
        with pytest.raises(DomainError, match="Division by a value with zero real"):
            x_1 / Dual(0.0, 1.0)

    def test_division_by_zero_float(self, x_1) -> None:
        with pytest.raises(DomainError, match="Division by a value with zero real"):
            x_1 / 0.0

    def test_reciprocal_of_zero(self) -> None:
        with pytest.raises(DomainError):
            1 / Dual(0.0, 1.0)

    def test_domain_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            1 / Dual(0.0, 1.0)

    def test_sqrt_negative(self) -> None:
        with pytest.raises(DomainError, match="non-negative"):
            dual_sqrt(Dual(-1.0, 1.0))
        with pytest.raises(DomainError, match="non-negative"):
            dual_sqrt(-1.0)

    def test_sqrt_zero(self) -> None:
        assert dual_sqrt(0.0) == 0.0
        with pytest.raises(DomainError, match="no finite derivative"):
            dual_sqrt(Dual(0.0, 1.0))

    def test_log_non_positive(self) -> None:
        with pytest.raises(DomainError, match="positive values"):
            dual_log(Dual(0.0, 1.0))
        with pytest.raises(DomainError, match="positive values"):
            dual_log(-2.0)

    def test_pow_negative_base(self) -> None:
        with pytest.raises(DomainError, match="non-integer power"):
            Dual(-8.0, 1.0) ** (1 / 3)

    @pytest.mark.parametrize("power", [0.5, -1, -2.5])
    def test_pow_zero_base(self, power) -> None:
        with pytest.raises(DomainError, match="Zero raised to the power"):
            Dual(0.0, 1.0) ** power

    def test_pow_zero_base_above_one(self) -> None:
        assert Dual(0.0, 1.0) ** 2 == Dual(0.0, 0.0)

    def test_rpow_non_positive_base(self, x_1) -> None:
        with pytest.raises(DomainError, match="positive base"):
            (-2.0) ** x_1


class TestNested:
    def test_order(self, x_1, y_1) -> None:
        assert x_1.order == 1
        assert y_1.order == 2
        assert Dual(y_1, Dual(Dual(0.0, 0.0), Dual(0.0, 0.0))).order == 3

    def test_lower_order_is_constant(self, x_1, y_1) -> None:
        result = y_1 * x_1
        assert result == Dual(Dual(6.0, 5.0), Dual(2.0, 1.0))

    def test_mixed_order_commutes(self, x_1, y_1) -> None:
        assert x_1 * y_1 == y_1 * x_1
        assert x_1 + y_1 == y_1 + x_1
        assert x_1 - y_1 == -(y_1 - x_1)

    def test_mixed_order_division(self, x_1, y_1) -> None:
        result = x_1 / y_1
        assert result.order == 2
        assert float(result) == pytest.approx(2.0 / 3.0)
        inverse = y_1 / x_1
        assert float(inverse) == pytest.approx(1.5)

    def test_mixed_order_pow(self, x_1, y_1) -> None:
        result = x_1**y_1
        assert result.order == 2
        assert float(result) == pytest.approx(8.0)

    def test_nested_product_rule(self, y_1) -> None:
        # f(x) = x^2 at a second order seed carries f, f', f', f''
        result = y_1 * y_1
        assert result == Dual(Dual(9.0, 6.0), Dual(6.0, 2.0))

    def test_nested_elementary(self, y_1) -> None:
        result = dual_exp(y_1)
        e3 = math.exp(3.0)
        assert result == Dual(Dual(e3, e3), Dual(e3, e3))


class TestNumpy:
    def test_numpy_scalars(self) -> None:
        x = Dual(np.float64(2.0), np.float64(1.0))
        assert x * np.float32(2.0) == Dual(4.0, 2.0)
        assert x + np.int64(1) == Dual(3.0, 1.0)

    def test_object_array_ufuncs(self) -> None:
        arr = np.array([Dual(0.0, 1.0), Dual(1.0, 1.0)], dtype=object)
        result = np.exp(arr)
        assert result[0] == Dual(1.0, 1.0)
        assert result[1] == Dual(math.exp(1.0), math.exp(1.0))

        result = np.sin(arr)
        assert result[0] == Dual(0.0, 1.0)

    def test_array_broadcast(self, x_1) -> None:
        result = np.array([1.0, 2.0]) * x_1
        assert result[0] == Dual(2.0, 1.0)
        assert result[1] == Dual(4.0, 2.0)
