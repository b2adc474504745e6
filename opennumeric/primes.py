"""
Lazy prime sequences, next prime and factorization

All sequences are generators: they are created on demand, hold only
the current candidate and are infinite for arbitrary precision integers
(fixed width sequences end at the max. representable value). Take only
what you need::

    >>> from opennumeric import primes
    >>> from opennumeric.iterlib import take
    >>> take(primes.numbers(), 10)
    [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    >>> take(primes.numbers(-10), 3)
    [-11, -13, -17]
    >>> primes.nextprime(13)
    17
    >>> list(primes.multiples_of(360))
    [2, 2, 2, 3, 3, 5]

"""
from __future__ import annotations
import functools as _functools
import logging
import math
import os
from itertools import count as _count
from numbers import Integral as _Integral
from typing import TYPE_CHECKING

import numpy as np

from opennumeric import iterlib
from opennumeric.config import config
from opennumeric.numtheory import (IntKind, U64, I64, BIGINT, getkind, inferkind,
                                   testerfor, _asint)

if TYPE_CHECKING:
    from typing import Iterator


__all__ = ("NotFoundError",
           "candidates",
           "numbers",
           "numbers_unsigned",
           "numbers_signed",
           "numbers_big",
           "numbers_in_parallel",
           "nextprime",
           "multiples_of",
           )


logger = logging.getLogger("opennumeric.primes")


# Max. value accepted as degree of parallelism (an unsigned 16-bit value)
MAXDEGREE = 65535


class NotFoundError(ValueError):
    """ Raised when a fixed width range has no prime left to produce """
    pass


def _resolvekind(value, kind: IntKind | str | None) -> IntKind:
    if kind is None:
        return inferkind(value)
    return getkind(kind)


def candidates(starting_at=2, kind: IntKind | str = None) -> Iterator[int]:
    """
    Iterate over the odd numbers which need to be tested for primality

    Starting at abs(starting_at): 2 is produced if the start is 2 or less,
    an even start is bumped to the next odd number. The sign of
    starting_at is applied to each candidate

    Args:
        starting_at: the start value (inclusive)
        kind: the magnitude class. If not given it is inferred from
            starting_at

    Returns:
        an iterator over the candidates. For a fixed width kind the
        iterator ends before reaching the max. value of the kind

    Example::

        >>> take(candidates(8), 4)
        [9, 11, 13, 15]
        >>> take(candidates(-1), 4)
        [-2, -3, -5, -7]
    """
    kind = _resolvekind(starting_at, kind)
    return _candidates(kind.check(_asint(starting_at)), kind)


def _candidates(start: int, kind: IntKind) -> Iterator[int]:
    sign = -1 if start < 0 else 1
    n = abs(start)
    stop = kind.maxvalue - 1 if kind.bounded else None
    if n <= 2:
        yield sign * 2
        n = 3
    elif not (n & 1):
        n += 1
    if stop is None:
        for n in _count(n, 2):
            yield sign * n
    else:
        while n < stop:
            yield sign * n
            n += 2


def _testmagnitude(tester, n: int) -> bool:
    return tester(abs(n))


def numbers(starting_at=2, kind: IntKind | str = None) -> Iterator[int]:
    """
    Iterate over every prime starting at the given value (inclusive)

    Args:
        starting_at: allows to skip ahead. A negative value produces
            negative primes of increasing magnitude
        kind: the magnitude class, one of U64, I64, BIGINT (or their
            names). If not given it is inferred from starting_at
            (see :func:`~opennumeric.numtheory.inferkind`)

    Returns:
        an iterator over the primes. Infinite for BIGINT
    """
    kind = _resolvekind(starting_at, kind)
    start = kind.check(_asint(starting_at))
    tester = testerfor(kind)
    if start < 0:
        return filter(_functools.partial(_testmagnitude, tester), _candidates(start, kind))
    return filter(tester, _candidates(start, kind))


def numbers_unsigned(starting_at=2) -> Iterator[int]:
    """ Primes as unsigned 64-bit values, starting at starting_at """
    return numbers(starting_at, U64)


def numbers_signed(starting_at=2) -> Iterator[int]:
    """
    Primes as signed 64-bit values. A negative start produces negative primes
    """
    return numbers(starting_at, I64)


def numbers_big(starting_at=2) -> Iterator[int]:
    """ Primes of arbitrary size, never ends """
    return numbers(starting_at, BIGINT)


def _checkdegree(degree) -> int:
    if isinstance(degree, bool) or not isinstance(degree, _Integral):
        raise TypeError(f"degree should be an int, got {type(degree).__name__}")
    degree = int(degree)
    if not 1 <= degree <= MAXDEGREE:
        raise ValueError(f"degree should be within [1, {MAXDEGREE}], got {degree}")
    return degree


def _defaultdegree() -> int:
    degree = config['parallel.degree']
    return degree if degree > 0 else (os.cpu_count() or 1)


def numbers_in_parallel(starting_at=2,
                        degree: int = None,
                        kind: IntKind | str = None,
                        backend: str = None,
                        chunksize: int = None
                        ) -> Iterator[int]:
    """
    Like :func:`numbers`, testing candidates in a pool of workers

    The order of the output is the same as with :func:`numbers`, only
    throughput is affected. Invalid arguments raise at call time.

    Args:
        starting_at: the start value (inclusive)
        degree: the number of workers (1-65535). If not given,
            config['parallel.degree'] is used (0 = number of cpus)
        kind: the magnitude class. If not given, it is inferred
        backend: 'thread' or 'process'. If not given,
            config['parallel.backend'] is used
        chunksize: number of candidates per task. Defaults to
            config['parallel.chunksize']

    Returns:
        an iterator over the primes. Closing it shuts the pool down

    Example::

        >>> take(numbers_in_parallel(100, degree=4), 5)
        [101, 103, 107, 109, 113]
    """
    degree = _defaultdegree() if degree is None else _checkdegree(degree)
    kind = _resolvekind(starting_at, kind)
    start = kind.check(_asint(starting_at))
    tester = testerfor(kind)
    predicate = _functools.partial(_testmagnitude, tester) if start < 0 else tester
    logger.debug(f"numbers_in_parallel: start={start}, kind={kind.name}, degree={degree}")
    return iterlib.ordered_parallel_filter(
        predicate,
        _candidates(start, kind),
        workers=degree,
        chunksize=chunksize if chunksize is not None else config['parallel.chunksize'],
        prefetch=config['parallel.prefetch'],
        backend=backend or config['parallel.backend'])


def nextprime(after, kind: IntKind | str = None) -> int:
    """
    Return the next prime after the given number

    If after is negative, the result is the next prime of greater
    magnitude, as a negative number. A float is truncated first

    Args:
        after: the excluded lower boundary (in magnitude)
        kind: the magnitude class. If not given, it is inferred

    Returns:
        the next prime

    Raises:
        NotFoundError: if there is no prime after `after` within the
            range of the kind

    Example::

        >>> nextprime(10)
        11
        >>> nextprime(-10)
        -11
        >>> nextprime(13.7)
        17
    """
    if isinstance(after, (float, np.floating)):
        if not math.isfinite(after):
            raise ValueError(f"Cannot find the next prime after {after}")
        after = int(after)
        if kind is None:
            kind = I64 if I64.contains(after) else BIGINT
    kind = _resolvekind(after, kind)
    after = kind.check(_asint(after))
    sign = -1 if after < 0 else 1
    start = abs(after) + 1
    if not kind.contains(start):
        raise NotFoundError(f"There is no prime after {after} within {kind.name}")
    p = iterlib.first(numbers(start, kind))
    if p is None:
        raise NotFoundError(f"There is no prime after {after} within {kind.name}")
    return sign * p


def multiples_of(value: int, kind: IntKind | str = U64) -> Iterator[int]:
    """
    Iterate over the prime factors of value, in ascending order

    Each factor is repeated according to its multiplicity. This is a
    plain trial division against the ascending primes

    Args:
        value: the value to factorize (non negative)
        kind: U64 (default) or BIGINT

    Returns:
        an iterator over the prime factors. For 0 and 1 the value itself
        is produced

    Example::

        >>> list(multiples_of(360))
        [2, 2, 2, 3, 3, 5]
    """
    kind = getkind(kind)
    value = kind.check(_asint(value))
    if value < 0:
        raise ValueError(f"Cannot factorize a negative value ({value})")
    return _multiples(value, kind)


def _multiples(value: int, kind: IntKind) -> Iterator[int]:
    last = 1
    for p in numbers(2, kind):
        # the possible divisors shrink with each prime tried
        if p > value // last:
            break
        while not (value % p):
            value //= p
            yield p
            if value == 1:
                return
        last = p
    yield value
