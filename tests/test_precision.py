from __future__ import annotations

import math
from decimal import Decimal

import numpy as np
import pytest

from opennumeric import precision as p


def test_is_near_equal() -> None:
    assert p.is_near_equal(1.0, 1.0, 0.0)
    assert p.is_near_equal(0.1 + 0.2, 0.3, 1e-9)
    assert not p.is_near_equal(1.0, 1.1, 0.05)
    assert p.is_near_equal(math.nan, math.nan, 0.1)
    assert not p.is_near_equal(math.nan, 1.0, 0.1)
    assert p.is_near_equal(np.float32(0.5), np.float32(0.5000001), 1e-6)


def test_is_near_equal_decimal() -> None:
    assert p.is_near_equal(Decimal("1.000"), Decimal("1.0004"), Decimal("0.001"))
    assert not p.is_near_equal(Decimal("1.0"), Decimal("1.1"), Decimal("0.01"))
    with pytest.raises(TypeError):
        p.is_near_equal(Decimal("1.0"), 1.5, 0.1)
    with pytest.raises(TypeError):
        p.is_near_equal(None, 1.0, 0.1)


def test_is_precise_equal() -> None:
    assert p.is_precise_equal(0.3, 0.3)
    assert not p.is_precise_equal(0.1 + 0.2, 0.3)
    assert p.is_precise_equal(None, None)
    assert not p.is_precise_equal(None, 1.0)
    assert p.is_precise_equal(math.nan, math.nan)
    assert not p.is_precise_equal(1.0, 2.0, string_validate=True)


def test_zero_helpers(restore_config) -> None:
    assert p.is_zero(0.0)
    assert p.is_zero(-0.0)
    assert not p.is_zero(1e-300)
    assert p.is_near_zero(0.0005)
    assert not p.is_near_zero(0.002)
    assert p.is_near_zero(0.002, 0.01)
    restore_config['precision.nearZero'] = 0.01
    assert p.is_near_zero(0.002)
    assert p.fix_zero(0.0) == 0.0
    assert p.fix_zero(1.5) == 1.5
    assert p.is_zero(Decimal(0))
    assert not p.is_zero(Decimal("0.5"))
    assert p.is_near_zero(Decimal("0.0005"), 0.001)
    assert not p.is_near_zero(Decimal("0.5"))
    assert p.fix_zero(Decimal("0.5")) == Decimal("0.5")
    assert p.fix_zero(Decimal("-0")) == 0


def test_isnan_and_default() -> None:
    assert p.isnan(math.nan)
    assert p.isnan(np.float32("nan"))
    assert p.isnan(Decimal("NaN"))
    assert not p.isnan(1)
    assert p.is_default(0.0)
    assert not p.is_default(0.1)


def test_decimal_places() -> None:
    assert p.decimal_places(1.25) == 2
    assert p.decimal_places(3.0) == 0
    assert p.decimal_places(100) == 0
    assert p.decimal_places(0.1 + 0.2) == 17
    assert p.decimal_places(1e-5) == 5
    assert p.decimal_places(np.float32(0.1)) == 1
    assert p.decimal_places(math.nan) == 0
    assert p.decimal_places(math.inf) == 0


def test_is_relative_near_equal() -> None:
    assert p.is_relative_near_equal(1.0001, 1.0002, 3)
    assert not p.is_relative_near_equal(1.1, 1.5, 3)
    assert not p.is_relative_near_equal(math.nan, 1.0, 2)
    with pytest.raises(ValueError):
        p.is_relative_near_equal(1.0, 1.0, -1)


def test_to_double() -> None:
    f = np.float32(0.1)
    assert float(f) != 0.1
    assert p.to_double(f) == 0.1
    assert p.to_double(np.float32(2 / 3), 3) == 0.667
    assert p.to_double(np.float32(1.5), 0) == 2.0
    assert math.isnan(p.to_double(None))
    assert math.isnan(p.to_double(np.float32("nan")))
    assert p.to_double(np.float32("inf")) == math.inf
    assert p.to_double(np.float32("-inf"), 2) == -math.inf


def test_to_double_invalid_precision() -> None:
    with pytest.raises(ValueError):
        p.to_double(np.float32(1.0), 16)
    with pytest.raises(ValueError):
        p.to_double(np.float32(1.0), -1)
    with pytest.raises(ValueError):
        p.to_double(None, 20)


def test_to_decimal_and_convert() -> None:
    assert p.to_decimal(np.float32(0.1)) == Decimal("0.1")
    assert p.to_decimal(np.float32(2.5)) == Decimal("2.5")
    assert p.convert_to_double(np.float32(0.1)) == 0.1
    assert p.convert_to_double(3) == 3.0
    assert p.convert_to_double("1.5") == 1.5
    assert math.isnan(p.convert_to_double(None))


def test_accurate_arithmetic() -> None:
    assert 0.1 + 0.2 != 0.3
    assert p.sum_accurate(0.1, 0.2) == 0.3
    assert p.sum_accurate(1.25, 2.5) == 3.75
    assert p.product_accurate(1.1, 1.1) == 1.21
    assert p.product_accurate(0.5, 0.5) == 0.25
    assert p.sum_using_integers(0.1, 0.2) == 0.3
    assert p.sum_using_integers(1.005, 2) == 3.005
    # subnormal operands cannot be scaled to integers
    assert p.sum_using_integers(1e-320, 0.0) == 1e-320
    assert p.sum_using_integers(1 / 3, 1.0) == 1 / 3 + 1.0
    # too many decimal places, left untouched
    third = 1 / 3
    assert p.sum_accurate(third, 1.0) == third + 1.0
