"""
Core functionality for ordinal-bloom.
"""

from ordinal_bloom.core.base import ByteEncodable, MembershipFilter
from ordinal_bloom.core.exceptions import InvalidParameterError
from ordinal_bloom.core.hash import encode_item, hash_round, murmurhash3_x64_128
from ordinal_bloom.core.sizing import (
    Sizing,
    compute_sizing,
    expected_false_positive_rate,
    optimal_bit_array_size,
    optimal_hash_func_num,
)

__all__ = [
    # Base classes
    "MembershipFilter",
    "ByteEncodable",
    "InvalidParameterError",
    # Sizing
    "Sizing",
    "compute_sizing",
    "optimal_bit_array_size",
    "optimal_hash_func_num",
    "expected_false_positive_rate",
    # Utility functions
    "encode_item",
    "murmurhash3_x64_128",
    "hash_round",
]
