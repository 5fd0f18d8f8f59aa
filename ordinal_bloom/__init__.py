"""
ordinal-bloom - Bloom filters with ordinal hash round encoding

ordinal-bloom provides two approximate membership query structures sized from a
target false positive rate and an expected capacity: a classic Bloom filter and
an ordinal variant whose cells record the highest hash round that touched them.
"""

__version__ = "0.1.0"

# Import main classes to make them available at the top level
from ordinal_bloom.algorithms.bloom import BasicBloomFilter, OrdinalBloomFilter
from ordinal_bloom.core.base import ByteEncodable, MembershipFilter
from ordinal_bloom.core.exceptions import InvalidParameterError
from ordinal_bloom.core.sizing import Sizing, compute_sizing

__all__ = [
    # Core
    "MembershipFilter",
    "ByteEncodable",
    "InvalidParameterError",
    "Sizing",
    "compute_sizing",
    # Filter implementations
    "BasicBloomFilter",
    "OrdinalBloomFilter",
]
