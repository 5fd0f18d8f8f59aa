"""
Algorithm implementations for ordinal-bloom.
"""

from ordinal_bloom.algorithms.bloom import BasicBloomFilter, OrdinalBloomFilter

__all__ = [
    "BasicBloomFilter",
    "OrdinalBloomFilter",
]
