"""
Configuration of opennumeric

Example::

    >>> from opennumeric.config import config
    >>> config['parallel.backend'] = 'process'
    >>> config.save()   # persist the modified keys for future sessions
"""
from opennumeric import conftools


_default = {
    'primes.crossover': 380000,
    'parallel.degree': 0,
    'parallel.backend': 'thread',
    'parallel.chunksize': 64,
    'parallel.prefetch': 4,
    'precision.nearZero': 0.001,
    'procresults.compareTolerance': 1e-8,
}

_validator = {
    'primes.crossover::range': (0, 2**64),
    'parallel.degree::range': (0, 65535),
    'parallel.backend::choices': ['thread', 'process'],
    'parallel.chunksize::range': (1, 65536),
    'parallel.prefetch::range': (1, 1024),
    'precision.nearZero::range': (0, 1),
    'procresults.compareTolerance::range': (0, 1),
}

_help = {
    'primes.crossover':
        "Below this magnitude primality is tested by odd trial division, above "
        "it the 6k±1 wheel is used. Only affects performance",
    'parallel.degree':
        "Number of workers used by numbers_in_parallel when no degree is given. "
        "0 uses the number of cpus",
    'parallel.backend':
        "Executor used by numbers_in_parallel",
    'parallel.chunksize':
        "Number of candidates tested by a worker in one task",
    'parallel.prefetch':
        "Number of tasks kept in flight per worker",
    'precision.nearZero':
        "Default tolerance of is_near_zero",
    'procresults.compareTolerance':
        "Two averages closer than this (and with the same repr) compare as equal",
}


config = conftools.ConfigDict('opennumeric:config', _default, _validator, help=_help)
