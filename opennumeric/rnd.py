"""
Random selection

All functions draw from a module level random generator, which can be
seeded via :func:`seed` to get reproducible results
"""
from __future__ import annotations
import random
from numbers import Integral as _Integral

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Collection, MutableSequence, Sequence, TypeVar, Iterable
    T = TypeVar("T")


__all__ = ("seed",
           "getrng",
           "random_pluck",
           "random_select_one",
           "random_select_one_except",
           "next_random_integer_excluding")


_rng = random.Random()

_MISSING = object()


def getrng() -> random.Random:
    """ The random generator used by this module """
    return _rng


def seed(n) -> None:
    """ Seed the random generator used by this module """
    _rng.seed(n)


def random_pluck(source: MutableSequence[T], default=_MISSING) -> T:
    """
    Remove a random element from source and return it

    Args:
        source: a mutable seq. (a list, a deque)
        default: if given, it is returned when source is empty

    Returns:
        the removed element

    Example::

        >>> seq = [1, 2, 3]
        >>> x = random_pluck(seq)
        >>> len(seq)
        2
    """
    if not source:
        if default is not _MISSING:
            return default
        raise IndexError("Source collection is empty")
    idx = _rng.randrange(len(source))
    value = source[idx]
    del source[idx]
    return value


def random_select_one(source: Sequence[T], excluding: Collection[T] = None) -> T:
    """
    Select a random element of source which is not in excluding

    Raises:
        IndexError: if source is empty
        ValueError: if excluding leaves nothing to select
    """
    if not source:
        raise IndexError("Source collection is empty")
    if excluding:
        source = [x for x in source if x not in excluding]
        if not source:
            raise ValueError("Exclusion set invalidates the source. No possible "
                             "value can be selected")
    return _rng.choice(source)


def random_select_one_except(source: Iterable[T], excluding: T) -> T:
    """
    Select a random element of source which is not equal to excluding
    """
    source = list(source)
    if not source:
        raise IndexError("Source collection is empty")
    return random_select_one(source, (excluding,))


def _excludingone(n: int, excluding: int) -> int:
    if excluding == 0:
        if n == 1:
            raise ValueError("No value is available with a range of 1 and exclusion of 0")
        return _rng.randrange(n - 1) + 1
    if excluding >= n or excluding < 0:
        return _rng.randrange(n)
    r = _rng.randrange(n - 1)
    return r if r < excluding else r + 1


def next_random_integer_excluding(n: int, excluding: int | Iterable[int] = None) -> int:
    """
    A random integer within [0, n) which is not excluded

    Args:
        n: the upper bound (exclusive), must be greater than 0
        excluding: an integer or a collection of integers to exclude

    Returns:
        the random integer

    Raises:
        ValueError: if n is not positive or all values are excluded

    Example::

        >>> next_random_integer_excluding(3, {0, 1})
        2
    """
    if isinstance(n, bool) or not isinstance(n, _Integral):
        raise TypeError(f"n should be an int, got {type(n).__name__}")
    if n <= 0:
        raise ValueError(f"n should be a number greater than zero, got {n}")
    if excluding is None:
        return _rng.randrange(n)
    if isinstance(excluding, _Integral):
        return _excludingone(n, int(excluding))
    excludeset = set(excluding)
    if not excludeset:
        return _rng.randrange(n)
    if len(excludeset) == 1:
        return _excludingone(n, excludeset.pop())
    choices = [i for i in range(n) if i not in excludeset]
    if not choices:
        raise ValueError(f"All values within [0, {n}) are excluded")
    return _rng.choice(choices)
