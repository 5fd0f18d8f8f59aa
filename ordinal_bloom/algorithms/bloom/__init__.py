"""
Bloom Filter implementations for ordinal-bloom.

This module provides Bloom Filter implementations for efficient set membership testing
with bounded memory usage.

This includes:
- BasicBloomFilter: Standard Bloom filter with one bit per bucket
- OrdinalBloomFilter: Variant recording the highest hash round per bucket
"""

from ordinal_bloom.algorithms.bloom.base import BasicBloomFilter
from ordinal_bloom.algorithms.bloom.ordinal import OrdinalBloomFilter

__all__ = [
    "BasicBloomFilter",
    "OrdinalBloomFilter",
]
