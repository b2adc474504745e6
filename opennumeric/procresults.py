"""
Running averages

A :class:`ProcedureResult` accumulates a sum and a count and exposes their
average. :class:`ProcedureResults` does the same for a vector of values, as
needed when a procedure produces several measurements per run.
Both are immutable: adding a value returns a new instance.

Example::

    >>> r = ProcedureResult()
    >>> r = r.add(2).add(4)
    >>> r.average
    3.0
    >>> (r + ProcedureResult(9, 1)).average
    5.0
"""
from __future__ import annotations
import functools as _functools
import math

import numpy as np

from opennumeric.config import config
from opennumeric.precision import is_near_equal

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Sequence


__all__ = ("ProcedureResult",
           "ProcedureResults")


@_functools.total_ordering
class ProcedureResult:
    """
    The sum and count of a series of values, and their average

    Results are ordered by their average, NaN being the lowest. Two
    results compare equal when their averages are the same

    Args:
        sum: the sum of the values
        count: the number of values. The average of a result
            without values is NaN
    """
    __slots__ = ('sum', 'count', 'average')

    def __init__(self, sum: float = 0., count: int = 0):
        self.sum = sum
        self.count = count
        self.average = math.nan if count == 0 else sum / count

    def add(self, value: float, count=1) -> ProcedureResult:
        """ Returns a new result with value added (value counts as `count` values) """
        return ProcedureResult(self.sum + value, self.count + count)

    def __add__(self, other: ProcedureResult) -> ProcedureResult:
        if not isinstance(other, ProcedureResult):
            return NotImplemented
        return ProcedureResult(self.sum + other.sum, self.count + other.count)

    def compare(self, other: ProcedureResult) -> int:
        """
        -1, 0 or 1 if self is less than, equal to or greater than other
        """
        a, b = self.average, other.average
        if is_near_equal(a, b, config['procresults.compareTolerance']) and str(a) == str(b):
            return 0
        if a < b or math.isnan(a):
            return -1
        return 1

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProcedureResult):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other) -> bool:
        if not isinstance(other, ProcedureResult):
            return NotImplemented
        return self.compare(other) < 0

    __hash__ = None

    def __repr__(self) -> str:
        return f"ProcedureResult(sum={self.sum}, count={self.count}, average={self.average})"


def _asarray(values: Sequence[float]) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"Expected a one dimensional seq. of values, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


class ProcedureResults:
    """
    The element-wise sum and count of a series of vectors, and their average

    Args:
        sum: the element-wise sum of the vectors
        count: the number of vectors
    """
    __slots__ = ('sum', 'count', 'average')

    EMPTY: ProcedureResults

    def __init__(self, sum: Sequence[float] = (), count: int = 0):
        self.sum = _asarray(sum)
        self.count = count
        if count == 0:
            average = np.full_like(self.sum, np.nan)
        else:
            average = self.sum / count
        average.flags.writeable = False
        self.average = average

    def __len__(self) -> int:
        return len(self.sum)

    def _sumvalues(self, values) -> np.ndarray:
        values = _asarray(values)
        if self.count == 0 and len(self.sum) == 0:
            # an empty result takes the length of the first values added
            return values
        if len(values) != len(self.sum):
            raise ValueError(f"Length mismatch: expected {len(self.sum)} values, "
                             f"got {len(values)}")
        return self.sum + values

    def add(self, values: Sequence[float], count=1) -> ProcedureResults:
        """ Returns a new result with values added element-wise """
        return ProcedureResults(self._sumvalues(values), self.count + count)

    def __add__(self, other: ProcedureResults) -> ProcedureResults:
        if not isinstance(other, ProcedureResults):
            return NotImplemented
        if other.count == 0 and len(other) == 0:
            return self
        return ProcedureResults(self._sumvalues(other.sum), self.count + other.count)

    def __repr__(self) -> str:
        return (f"ProcedureResults(sum={self.sum.tolist()}, count={self.count}, "
                f"average={self.average.tolist()})")


ProcedureResults.EMPTY = ProcedureResults()
