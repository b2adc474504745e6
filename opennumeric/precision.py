"""
Floating point comparison and conversion

* **Comparison**: `is_near_equal`, `is_precise_equal`, `is_relative_near_equal`,
  `is_zero`, `is_near_zero`
* **Conversion**: `to_double`, `to_decimal`, `convert_to_double` (float32 values
  are converted via their shortest representation, avoiding the noise
  introduced by widening the binary value)
* **Arithmetic**: `sum_accurate`, `product_accurate`, `sum_using_integers`

"""
from __future__ import annotations
import math
from decimal import Decimal

import numpy as np

from opennumeric.config import config


__all__ = ("isnan",
           "is_default",
           "is_near_equal",
           "is_precise_equal",
           "is_relative_near_equal",
           "is_zero",
           "is_near_zero",
           "fix_zero",
           "decimal_places",
           "to_double",
           "to_decimal",
           "convert_to_double",
           "sum_accurate",
           "product_accurate",
           "sum_using_integers",
           )


# Max. number of decimal places which a double can represent reliably
MAXPRECISION = 15

_EPSILON64 = float(np.finfo(np.float64).smallest_subnormal)
_EPSILON32 = float(np.finfo(np.float32).smallest_subnormal)


def isnan(value) -> bool:
    """ True if value is a NaN (float, numpy float or Decimal) """
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    return False


def is_default(value) -> bool:
    """ True if value equals 0 """
    return value == 0


def is_near_equal(a, b, tolerance) -> bool:
    """
    True if a and b are equal, both NaN or closer than tolerance

    Args:
        a: a float, numpy float or Decimal
        b: a value of the same type as a
        tolerance: the tolerance (exclusive)

    Returns:
        True if a and b are considered equal

    Example::

        >>> is_near_equal(0.1 + 0.2, 0.3, 1e-9)
        True
        >>> is_near_equal(float('nan'), float('nan'), 0.1)
        True
    """
    if a is None or b is None:
        raise TypeError("Cannot compare None values")
    if a == b:
        return True
    if isnan(a) and isnan(b):
        return True
    return abs(a - b) < tolerance


def _epsilon(value):
    if isinstance(value, Decimal):
        return Decimal(0)
    if isinstance(value, np.float32):
        return _EPSILON32
    return _EPSILON64


def is_precise_equal(a, b, string_validate=False) -> bool:
    """
    True if a and b are equal within the smallest positive value of their type

    Two None values are equal, None is never equal to a number

    Args:
        a: first value
        b: second value
        string_validate: if True, a and b are also equal if their string
            representations are the same
    """
    if a is None or b is None:
        return a is None and b is None
    if is_near_equal(a, b, _epsilon(a)):
        return True
    return (string_validate and not isnan(a) and not isnan(b)
            and str(a) == str(b))


def _zero(value):
    return Decimal(0) if isinstance(value, Decimal) else 0.0


def is_zero(value) -> bool:
    """ True if value is zero within the smallest positive value of its type """
    return is_precise_equal(value, _zero(value))


def is_near_zero(value, precision: float = None) -> bool:
    """
    True if value is within precision of 0

    Args:
        value: the value to check
        precision: the tolerance. Defaults to config['precision.nearZero']
    """
    if precision is None:
        precision = config['precision.nearZero']
    return is_near_equal(value, _zero(value), precision)


def fix_zero(value):
    """ Returns true zero if value is considered zero, value otherwise """
    return _zero(value) if value != 0 and is_zero(value) else value


def decimal_places(value) -> int:
    """
    The number of decimal places of value, without trailing zeros

    The shortest representation which round-trips to value is used.
    NaN and inf have 0 decimal places

    Example::

        >>> decimal_places(1.25)
        2
        >>> decimal_places(3.0)
        0
        >>> decimal_places(0.1 + 0.2)
        17
    """
    if not isinstance(value, np.floating):
        value = np.float64(value)
    if not np.isfinite(value):
        return 0
    s = np.format_float_positional(value, unique=True, trim='-')
    return len(s.partition('.')[2])


def is_relative_near_equal(a: float, b: float, min_decimal_places: int) -> bool:
    """
    Compare a and b at the precision given by their decimal places

    Both values are first compared with a tolerance of
    ``10 ** -min_decimal_places``. If they are not near equal, they are
    scaled according to the min. number of decimal places among them
    and compared again

    Args:
        a: first value
        b: second value
        min_decimal_places: the min. number of decimal places to take into account
    """
    if min_decimal_places < 0:
        raise ValueError(f"min_decimal_places should be >= 0, got {min_decimal_places}")
    tolerance = 1 / 10 ** min_decimal_places
    if is_near_equal(a, b, tolerance):
        return True
    if isnan(a) or isnan(b):
        return False
    d = min(decimal_places(a), decimal_places(b))
    divisor = 10.0 ** (min_decimal_places - d)
    return is_near_equal(a / divisor, b / divisor, tolerance)


def _checkprecision(precision: int) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise TypeError(f"precision should be an int, got {type(precision).__name__}")
    if not 0 <= precision <= MAXPRECISION:
        raise ValueError(f"precision should be between 0 and {MAXPRECISION}, got {precision}")
    return precision


def to_double(value, precision: int = None) -> float:
    """
    Convert a float32 value to a python float (a double)

    Widening the binary value of a float32 introduces noise
    (``float(np.float32(0.1)) == 0.10000000149011612``). Here the shortest
    decimal representation of the float32 is used instead or, if precision
    is given, the value is rounded to that number of decimal places.

    Args:
        value: the value to convert, interpreted as float32. None is
            converted to NaN
        precision: if given, round to this number of decimal places (0-15)

    Returns:
        the converted value. NaN and inf are returned unmodified

    Example::

        >>> to_double(np.float32(0.1))
        0.1
        >>> to_double(np.float32(2/3), 3)
        0.667
    """
    if precision is not None:
        _checkprecision(precision)
    if value is None:
        return math.nan
    f32 = np.float32(value)
    if not np.isfinite(f32):
        return float(f32)
    if precision is None:
        return float(str(f32))
    return round(float(f32), precision)


def to_decimal(value) -> Decimal:
    """
    Convert a float32 value to a Decimal via its shortest representation

    Example::

        >>> to_decimal(np.float32(0.1))
        Decimal('0.1')
    """
    return Decimal(str(np.float32(value)))


def convert_to_double(value) -> float:
    """
    Convert any value to float

    None is converted to NaN, float32 values are converted with
    :func:`to_double`, anything else via ``float``
    """
    if value is None:
        return math.nan
    if isinstance(value, np.float32):
        return to_double(value)
    return float(value)


def sum_accurate(a: float, b: float) -> float:
    """
    a + b, rounded to the max. number of decimal places of a and b

    If any of the operands has more than 15 decimal places the sum
    is returned as is

    Example::

        >>> 0.1 + 0.2
        0.30000000000000004
        >>> sum_accurate(0.1, 0.2)
        0.3
    """
    result = a + b
    vp = decimal_places(a)
    if vp > MAXPRECISION:
        return result
    ap = decimal_places(b)
    if ap > MAXPRECISION:
        return result
    return round(result, max(vp, ap))


def product_accurate(a: float, b: float) -> float:
    """
    a * b, rounded to the number of decimal places the exact product can have

    The exact product of two decimals has at most as many decimal places as
    both operands together. If that exceeds 15 the product is returned as is

    Example::

        >>> 1.1 * 1.1
        1.2100000000000002
        >>> product_accurate(1.1, 1.1)
        1.21
    """
    result = a * b
    digits = decimal_places(a) + decimal_places(b)
    if digits > MAXPRECISION:
        return result
    return round(result, digits)


def sum_using_integers(a: float, b: float) -> float:
    """
    a + b, computed by scaling both operands to integers

    If any of the operands has more than 15 decimal places the sum
    is returned as is

    Example::

        >>> sum_using_integers(0.1, 0.2)
        0.3
    """
    places = max(decimal_places(a), decimal_places(b))
    if places > MAXPRECISION:
        return a + b
    x = 10 ** places
    return (round(a * x) + round(b * x)) / x
