"""
**opennumeric** is a set of numeric utilities

Features
--------

- primes:
    - primality test for unsigned 64-bit, signed 64-bit and arbitrary precision
      integers, and for floats
    - lazy (infinite) prime sequences, next prime, prime factors
    - ordered parallel prime sequences
- precision: near equality under tolerance, accurate float32 conversion,
  accurate sums and products
- running averages (procresults)
- random selection (rnd)
- configuration (see `opennumeric.config`)
"""
from opennumeric.numtheory import isprime
from opennumeric.primes import (numbers, numbers_in_parallel, nextprime, multiples_of,
                                NotFoundError)
from opennumeric.precision import is_near_equal
