"""
PrimeBench - A benchmark of sequential versus parallel prime counting.
"""

from .counting import compare, parallel_count, sequential_count
from .primality import is_prime

__all__ = ['compare', 'is_prime', 'parallel_count', 'sequential_count']
