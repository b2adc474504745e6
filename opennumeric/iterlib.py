"""
Iterator tools
"""
from __future__ import annotations

import collections as _collections
import functools as _functools
import logging
from concurrent import futures
from itertools import islice
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from typing import Iterable, Iterator, TypeVar, Callable
    T = TypeVar("T")


logger = logging.getLogger("opennumeric.iterlib")

# Max. number of chunks pending in ordered_parallel_filter, regardless of
# the number of workers. Also bounds the size of the pool
MAXPENDING = 1024


def take(seq: Iterable[T], n: int) -> list[T]:
    """returns the first n elements of seq as a list"""
    return list(islice(seq, n))


def first(it: Iterable[T], default=None) -> T | None:
    """
    Returns the first element of it, or default if it is empty
    """
    return next(iter(it), default)


def iterchunks(seq: Iterable[T], chunksize: int) -> Iterator[tuple[T, ...]]:
    """
    Returns an iterator over chunks of seq of at most `chunksize` size.

    seq can be infinite. If it is finite and its length is not divisible
    by chunksize, the last chunk will have less than `chunksize` elements.

    Example
    ~~~~~~~

    >>> seq = range(20)
    >>> list(iterchunks(seq, 3))
    [(0, 1, 2), (3, 4, 5), (6, 7, 8), (9, 10, 11), (12, 13, 14), (15, 16, 17), (18, 19)]
    """
    if chunksize < 1:
        raise ValueError(f"chunksize should be >= 1, got {chunksize}")
    it = iter(seq)
    while True:
        chunk = tuple(islice(it, chunksize))
        if not chunk:
            break
        yield chunk


def _filterchunk(predicate: Callable[[T], bool], chunk: tuple[T, ...]) -> list[T]:
    return [x for x in chunk if predicate(x)]


def _makeexecutor(backend: str, workers: int) -> futures.Executor:
    if backend == 'thread':
        return futures.ThreadPoolExecutor(workers)
    elif backend == 'process':
        return futures.ProcessPoolExecutor(workers)
    raise ValueError(f"backend should be 'thread' or 'process', got {backend!r}")


def ordered_parallel_filter(predicate: Callable[[T], bool],
                            seq: Iterable[T],
                            workers: int,
                            chunksize=64,
                            prefetch=4,
                            backend='thread'
                            ) -> Iterator[T]:
    """
    Like filter(predicate, seq), evaluating the predicate in a pool of workers

    The output has the same order as filter(predicate, seq). seq is consumed
    lazily in chunks of `chunksize` items; at most `workers * prefetch`
    chunks (and never more than MAXPENDING) are pending at any moment, so
    seq can be infinite. The pool never has more than MAXPENDING workers

    Closing the returned generator (or dropping it) stops submitting work
    and shuts the pool down. An exception raised by the predicate is
    propagated to the consumer.

    Args:
        predicate: a function (item) -> bool. For the 'process' backend it
            (and the items) must be picklable
        seq: the items to filter
        workers: the number of workers
        chunksize: the number of items evaluated by a worker in one task
        prefetch: chunks in flight per worker
        backend: 'thread' or 'process'

    Returns:
        an iterator over the items of seq for which predicate is True

    Example
    ~~~~~~~

    >>> take(ordered_parallel_filter(lambda x: x % 3 == 0, itertools.count(), 4), 5)
    [0, 3, 6, 9, 12]
    """
    if workers < 1:
        raise ValueError(f"workers should be >= 1, got {workers}")
    if chunksize < 1:
        raise ValueError(f"chunksize should be >= 1, got {chunksize}")
    if prefetch < 1:
        raise ValueError(f"prefetch should be >= 1, got {prefetch}")
    maxpending = min(workers * prefetch, MAXPENDING)
    executor = _makeexecutor(backend, min(workers, maxpending))
    return _ordered(executor, _functools.partial(_filterchunk, predicate),
                    iterchunks(seq, chunksize), maxpending)


def _ordered(executor: futures.Executor,
             func: Callable,
             chunks: Iterator,
             maxpending: int
             ) -> Iterator:
    # pending futures are kept in submission order, the leftmost one is the
    # next chunk to be emitted
    pending: _collections.deque[futures.Future] = _collections.deque()
    logger.debug(f"ordered_parallel_filter: starting {executor.__class__.__name__}, "
                 f"maxpending={maxpending}")
    try:
        for chunk in islice(chunks, maxpending):
            pending.append(executor.submit(func, chunk))
        while pending:
            results = pending.popleft().result()
            chunk = next(chunks, None)
            if chunk is not None:
                pending.append(executor.submit(func, chunk))
            yield from results
    finally:
        for fut in pending:
            fut.cancel()
        executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("ordered_parallel_filter: executor shut down")
