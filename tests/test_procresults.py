from __future__ import annotations

import math

import numpy as np
import pytest

from opennumeric.procresults import ProcedureResult, ProcedureResults


def test_procedure_result_average() -> None:
    r = ProcedureResult()
    assert r.count == 0
    assert math.isnan(r.average)
    r = r.add(2).add(4)
    assert (r.sum, r.count, r.average) == (6, 2, 3.0)
    r = r.add(9, count=3)
    assert r.count == 5
    assert r.average == 3.0


def test_procedure_result_is_immutable_by_value() -> None:
    r = ProcedureResult(1, 1)
    r2 = r.add(5)
    assert r.sum == 1
    assert r2.sum == 6


def test_procedure_result_combine() -> None:
    total = ProcedureResult(6, 2) + ProcedureResult(9, 1)
    assert total.sum == 15
    assert total.count == 3
    assert total.average == 5.0


def test_procedure_result_ordering() -> None:
    low = ProcedureResult(1, 1)
    high = ProcedureResult(4, 2)
    empty = ProcedureResult()
    assert low < high
    assert high > low
    assert empty < low
    assert sorted([high, empty, low]) == [empty, low, high]
    assert ProcedureResult(2, 1) == ProcedureResult(4, 2)
    assert ProcedureResult() == ProcedureResult()
    assert ProcedureResult(0.3, 1) != ProcedureResult(0.1 + 0.2, 1)


def test_procedure_results_average() -> None:
    r = ProcedureResults([2.0, 4.0], 1)
    r = r.add([4.0, 8.0])
    assert r.count == 2
    assert r.average.tolist() == [3.0, 6.0]
    assert len(r) == 2
    with pytest.raises(ValueError):
        r.sum[0] = 10


def test_procedure_results_empty() -> None:
    assert ProcedureResults.EMPTY.count == 0
    assert len(ProcedureResults.EMPTY) == 0
    r = ProcedureResults.EMPTY.add([1.0, 3.0])
    assert r.average.tolist() == [1.0, 3.0]
    assert len(ProcedureResults.EMPTY) == 0
    nan = ProcedureResults([1.0, 2.0], 0)
    assert np.isnan(nan.average).all()


def test_procedure_results_combine() -> None:
    total = ProcedureResults([1.0, 2.0], 1) + ProcedureResults([3.0, 4.0], 3)
    assert total.count == 4
    assert total.sum.tolist() == [4.0, 6.0]
    assert total.average.tolist() == [1.0, 1.5]


def test_procedure_results_empty_is_neutral() -> None:
    # The empty result is neutral on either side of +.
    r = ProcedureResults([1.0, 2.0], 1)
    for total in (r + ProcedureResults.EMPTY, ProcedureResults.EMPTY + r):
        assert total.count == 1
        assert total.sum.tolist() == [1.0, 2.0]
    folded = ProcedureResults.EMPTY
    for values in ([1.0, 2.0], [3.0, 4.0]):
        folded = ProcedureResults(values, 1) + folded
    assert folded.average.tolist() == [2.0, 3.0]


def test_procedure_results_length_mismatch() -> None:
    r = ProcedureResults([1.0, 2.0], 1)
    with pytest.raises(ValueError):
        r.add([1.0])
    with pytest.raises(ValueError):
        r + ProcedureResults([1.0, 2.0, 3.0], 1)
    with pytest.raises(ValueError):
        ProcedureResults([[1.0], [2.0]], 1)
