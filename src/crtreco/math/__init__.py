"""Module with fast, Numba-accelerated, compiled math routines.

- `cluster.py` includes clustering functions
"""

from . import cluster
