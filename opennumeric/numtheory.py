"""
Primality testing over fixed width and arbitrary precision integers

Three magnitude classes are supported: unsigned 64-bit (``U64``),
signed 64-bit (``I64``) and arbitrary precision (``BIGINT``). The
algorithm is the same for all of them, they only differ in the range
of values they accept:

* below :data:`CROSSOVER` a plain trial division by odd numbers is used
* at or above it (and always for ``BIGINT``) the 6k±1 wheel is used

The crossover only affects performance, never the result.
"""
from __future__ import annotations
import math
from numbers import Integral as _Integral
from typing import NamedTuple

import numpy as np

from opennumeric.config import config


__all__ = ("IntKind",
           "U64",
           "I64",
           "BIGINT",
           "CROSSOVER",
           "getkind",
           "inferkind",
           "isprime",
           "isprime_unsigned",
           "isprime_signed",
           "isprime_big",
           "isprime_float",
           "floorsqrt",
           "testerfor",
           )


# Below this magnitude trial division beats the wheel. This is the default,
# the value in use is config['primes.crossover']
CROSSOVER: int = config.default['primes.crossover']


class IntKind(NamedTuple):
    """
    A magnitude class

    Attributes:
        name: one of 'u64', 'i64', 'bigint'
        signed: True if negative values are accepted
        minvalue: the min. representable value, or None if unbounded
        maxvalue: the max. representable value, or None if unbounded
    """
    name: str
    signed: bool
    minvalue: int | None
    maxvalue: int | None

    def contains(self, value: int) -> bool:
        """ True if value is representable within this kind """
        if self.minvalue is not None and value < self.minvalue:
            return False
        if self.maxvalue is not None and value > self.maxvalue:
            return False
        return True

    def check(self, value: int) -> int:
        """
        Returns value as int, raises OverflowError if it is not representable
        """
        value = int(value)
        if not self.contains(value):
            raise OverflowError(f"{value} is out of range for {self.name} "
                                f"([{self.minvalue}, {self.maxvalue}])")
        return value

    @property
    def bounded(self) -> bool:
        return self.maxvalue is not None


U64 = IntKind('u64', False, 0, int(np.iinfo(np.uint64).max))
I64 = IntKind('i64', True, int(np.iinfo(np.int64).min), int(np.iinfo(np.int64).max))
BIGINT = IntKind('bigint', True, None, None)

_kinds = {kind.name: kind for kind in (U64, I64, BIGINT)}


def getkind(kind: IntKind | str) -> IntKind:
    """
    Resolve a kind given either as IntKind or by name

    Example::

        >>> getkind('u64') is U64
        True
    """
    if isinstance(kind, IntKind):
        return kind
    out = _kinds.get(kind)
    if out is None:
        raise ValueError(f"Unknown kind {kind!r}, expected one of {list(_kinds)}")
    return out


def inferkind(value) -> IntKind:
    """
    Infer the magnitude class of an integer value

    numpy integers map to their dtype. For a python int, U64 is used for
    non-negative values within the u64 range, I64 for negative values
    within the i64 range and BIGINT for anything else
    """
    if isinstance(value, np.unsignedinteger):
        return U64
    if isinstance(value, np.signedinteger):
        return I64
    value = _asint(value)
    if value >= 0:
        return U64 if value <= U64.maxvalue else BIGINT
    return I64 if value >= I64.minvalue else BIGINT


def _asint(value) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("bool is not accepted as an integer value")
    if not isinstance(value, _Integral):
        raise TypeError(f"Expected an integer, got {type(value).__name__}")
    return int(value)


def floorsqrt(a: int) -> int:
    """
    Return the floor of square root of the given integer.
    """
    return math.isqrt(a)


def _crossover() -> int:
    return config['primes.crossover']


def _trial_division(n: int) -> bool:
    for p in range(3, floorsqrt(n) + 1, 2):
        if not (n % p):
            return False
    return True


def _wheel(n: int) -> bool:
    # every prime > 3 has the form 6k-1 or 6k+1
    d = 6
    while d * d - 2 * d + 1 <= n:
        if not (n % (d - 1)):
            return False
        if not (n % (d + 1)):
            return False
        d += 6
    return True


def _basecase(n: int) -> bool | None:
    if n < 2:
        return False
    if n < 4:
        return True
    if not (n % 2) or not (n % 3):
        return False
    return None


def _isprime_fixed(n: int) -> bool:
    """ Primality of the non-negative magnitude n of a fixed width kind """
    base = _basecase(n)
    if base is not None:
        return base
    if n < _crossover():
        return _trial_division(n)
    return _wheel(n)


def _isprime_unbounded(n: int) -> bool:
    """ Primality of the non-negative magnitude n, always using the wheel """
    base = _basecase(n)
    if base is not None:
        return base
    return _wheel(n)


def testerfor(kind: IntKind):
    """
    Returns the primality function (magnitude: int) -> bool for kind

    The returned function expects a non-negative int. It is a module-level
    function and can be sent to a worker process
    """
    return _isprime_unbounded if kind is BIGINT else _isprime_fixed


def isprime_unsigned(value: int) -> bool:
    """
    Primality of an unsigned 64-bit value

    Raises OverflowError if value is not within [0, 2**64-1]
    """
    return _isprime_fixed(U64.check(_asint(value)))


def isprime_signed(value: int) -> bool:
    """
    Primality of a signed 64-bit value. A negative value is prime iff its
    absolute value is prime

    Raises OverflowError if value is not within [-2**63, 2**63-1]
    """
    return _isprime_fixed(abs(I64.check(_asint(value))))


def isprime_big(value: int) -> bool:
    """
    Primality of an integer of any size. The sign is ignored
    """
    return _isprime_unbounded(abs(_asint(value)))


def isprime_float(value: float) -> bool:
    """
    A float is prime iff it has no fractional part and its
    truncated magnitude is prime. nan and inf are never prime

    Example::

        >>> isprime_float(7.0)
        True
        >>> isprime_float(7.5)
        False
    """
    value = float(value)
    if not math.isfinite(value) or math.floor(value) != value:
        return False
    n = abs(int(value))
    if n <= U64.maxvalue:
        return _isprime_fixed(n)
    return _isprime_unbounded(n)


def isprime(value) -> bool:
    """
    Return True iff value is prime.

    Floats (python or numpy) follow :func:`isprime_float`, numpy unsigned
    integers are tested as u64, numpy signed integers as i64. For a python
    int the kind is inferred (see :func:`inferkind`)

    Args:
        value: the value to test

    Returns:
        True if value is prime. The sign of negative values is ignored

    Example::

        >>> [n for n in range(20) if isprime(n)]
        [2, 3, 5, 7, 11, 13, 17, 19]
        >>> isprime(-7)
        True
    """
    if isinstance(value, (float, np.floating)):
        return isprime_float(value)
    kind = inferkind(value)
    if kind is U64:
        return isprime_unsigned(value)
    elif kind is I64:
        return isprime_signed(value)
    return isprime_big(value)
