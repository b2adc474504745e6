from __future__ import annotations

import math

import numpy as np
import pytest

from opennumeric import numtheory
from opennumeric.numtheory import (BIGINT, I64, U64, getkind, inferkind, isprime, isprime_big,
                                   isprime_float, isprime_signed, isprime_unsigned)


def _sieve(limit: int) -> list[bool]:
    flags = [True] * (limit + 1)
    flags[0] = flags[1] = False
    for p in range(2, math.isqrt(limit) + 1):
        if flags[p]:
            for multiple in range(p * p, limit + 1, p):
                flags[multiple] = False
    return flags


def test_isprime_matches_sieve() -> None:
    # Every value in [0, 10000] agrees with a sieve of Eratosthenes.
    flags = _sieve(10000)
    assert [n for n in range(10001) if isprime(n)] == [n for n, f in enumerate(flags) if f]


def test_isprime_base_cases() -> None:
    # 0 and 1 are never prime, 2 and 3 always are.
    for func in (isprime, isprime_unsigned, isprime_signed, isprime_big):
        assert func(0) is False
        assert func(1) is False
        assert func(2) is True
        assert func(3) is True


def test_isprime_sign_is_ignored() -> None:
    # A negative integer is prime iff its magnitude is prime.
    for n in range(2000):
        assert isprime(n) == isprime(-n)
        assert isprime_signed(n) == isprime_signed(-n)
        assert isprime_big(n) == isprime_big(-n)


def test_isprime_float() -> None:
    # Floats are prime only when integral and of prime magnitude.
    assert isprime_float(7.0) is True
    assert isprime_float(-7.0) is True
    assert isprime_float(7.5) is False
    assert isprime_float(9.0) is False
    assert isprime(7.5) is False
    assert isprime(np.float32(13)) is True
    for value in (math.nan, math.inf, -math.inf):
        assert isprime_float(value) is False


def test_isprime_around_crossover() -> None:
    # Both branches of the tester agree with the unbounded (wheel only) tester.
    for n in range(numtheory.CROSSOVER - 500, numtheory.CROSSOVER + 500):
        assert isprime_unsigned(n) == isprime_big(n)
    assert isprime(379999) is True
    assert isprime(380003) is False   # 13 * 29231
    assert isprime(380009) is False   # 7 * 54287
    assert isprime(380041) is True
    assert isprime(1000003) is True
    assert isprime(999983 * 999983) is False


def test_crossover_is_tunable(restore_config) -> None:
    # Changing the crossover only changes the algorithm, never the result.
    assert numtheory.CROSSOVER == restore_config.default['primes.crossover']
    expected = [n for n in range(5000) if isprime(n)]
    restore_config['primes.crossover'] = 0
    assert numtheory._crossover() == 0
    assert [n for n in range(5000) if isprime(n)] == expected
    with pytest.raises(ValueError):
        restore_config['primes.crossover'] = -1


def test_large_values() -> None:
    # Values near and beyond the fixed width boundaries.
    assert isprime(1000000007) is True
    assert isprime(998244353) is True
    assert isprime(-1000000007) is True
    assert isprime_unsigned(2**64 - 1) is False
    assert isprime_signed(2**63 - 1) is False   # 7**2 * 73 * ...
    assert isprime_big(2**64 + 1) is False      # 274177 * 67280421310721
    assert isprime(2**64 + 1) is False


def test_out_of_range_values() -> None:
    # Fixed width testers refuse values outside their range.
    with pytest.raises(OverflowError):
        isprime_unsigned(-1)
    with pytest.raises(OverflowError):
        isprime_unsigned(2**64)
    with pytest.raises(OverflowError):
        isprime_signed(2**63)
    assert isprime_signed(-2**63) is False


def test_invalid_types() -> None:
    with pytest.raises(TypeError):
        isprime(True)
    with pytest.raises(TypeError):
        isprime("7")


def test_numpy_integers() -> None:
    assert isprime(np.uint64(97)) is True
    assert isprime(np.int64(-97)) is True
    assert isprime(np.int32(91)) is False


def test_kinds() -> None:
    assert getkind('u64') is U64
    assert getkind(I64) is I64
    with pytest.raises(ValueError):
        getkind('u128')
    assert inferkind(10) is U64
    assert inferkind(-10) is I64
    assert inferkind(2**64) is BIGINT
    assert inferkind(-2**63 - 1) is BIGINT
    assert inferkind(np.uint8(3)) is U64
    assert inferkind(np.int16(-3)) is I64
    assert U64.maxvalue == 2**64 - 1
    assert I64.minvalue == -2**63
    assert not BIGINT.bounded
