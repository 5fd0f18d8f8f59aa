"""
Sizing policy for ordinal-bloom filters.

Derives the cell array length and the number of hash rounds from a target
false positive rate and an expected capacity, using the standard formulas
for an optimally configured Bloom filter:

    m = ceil(-(n * ln(p)) / (ln(2)^2))
    k = round((m / n) * ln(2))

References:
    - Bloom, B. H. (1970). Space/time trade-offs in hash coding with allowable errors.
      Communications of the ACM, 13(7), 422-426.
"""

import math
import numbers
from typing import NamedTuple

from ordinal_bloom.core.exceptions import InvalidParameterError

LN2 = math.log(2)


class Sizing(NamedTuple):
    """Array length and hash round count for a filter."""

    bit_array_size: int
    hash_func_num: int


def _round_half_up(value: float) -> int:
    # C-style round() for non-negative values; Python's round() would send 2.5 to 2
    return int(math.floor(value + 0.5))


def validate_parameters(false_positive_rate: float, capacity: int) -> None:
    """
    Check that the filter parameters describe a buildable filter.

    Args:
        false_positive_rate: Target false positive rate, strictly between 0 and 1.
        capacity: Expected number of elements, at least 1.

    Raises:
        InvalidParameterError: If the rate is outside (0, 1), or capacity is below 1
                               or too large to convert to a float.
        TypeError: If capacity is not an integer.
    """
    # Written so that NaN also fails
    if not (0 < false_positive_rate < 1):
        raise InvalidParameterError(
            f"False positive rate must be between 0 and 1, got {false_positive_rate!r}"
        )
    if isinstance(capacity, bool) or not isinstance(capacity, numbers.Integral):
        raise TypeError(f"Capacity must be an integer, got {type(capacity).__name__}")
    if capacity < 1:
        raise InvalidParameterError(f"Capacity must be at least 1, got {capacity}")
    try:
        float(capacity)
    except OverflowError:
        raise InvalidParameterError(
            "Capacity is too large to size a filter for"
        ) from None


def optimal_bit_array_size(false_positive_rate: float, capacity: int) -> int:
    """
    Calculate the optimal array length for the given parameters.

    Args:
        false_positive_rate: Target false positive rate.
        capacity: Expected number of elements.

    Returns:
        Array length in cells, never less than 1.
    """
    m = -(capacity * math.log(false_positive_rate)) / (LN2 * LN2)
    return max(1, math.ceil(m))


def optimal_hash_func_num(bit_array_size: int, capacity: int) -> int:
    """
    Calculate the optimal number of hash rounds.

    A raw result of 0 (possible for tiny capacities with high rates) is raised to 1,
    since a filter without rounds would report every element as present.

    Args:
        bit_array_size: Array length in cells.
        capacity: Expected number of elements.

    Returns:
        Number of hash rounds, never less than 1.
    """
    k = (bit_array_size / capacity) * LN2
    return max(1, _round_half_up(k))


def compute_sizing(false_positive_rate: float, capacity: int) -> Sizing:
    """
    Derive the array length and hash round count for a filter.

    This is a pure function: the same inputs always produce the same result.

    Args:
        false_positive_rate: Target false positive rate, strictly between 0 and 1.
        capacity: Expected number of elements, at least 1.

    Returns:
        The computed Sizing.

    Raises:
        InvalidParameterError: If the parameters are out of range.
        TypeError: If capacity is not an integer.
    """
    validate_parameters(false_positive_rate, capacity)
    bit_array_size = optimal_bit_array_size(false_positive_rate, capacity)
    hash_func_num = optimal_hash_func_num(bit_array_size, capacity)
    return Sizing(bit_array_size, hash_func_num)


def expected_false_positive_rate(
    bit_array_size: int, hash_func_num: int, items: int
) -> float:
    """
    Theoretical false positive rate of a Bloom filter after `items` insertions.

    Formula: (1 - e^(-k*n/m))^k

    Args:
        bit_array_size: Array length (m).
        hash_func_num: Number of hash rounds (k).
        items: Number of insertions (n).

    Returns:
        The estimated false positive rate, between 0 and 1.
    """
    if bit_array_size <= 0 or items <= 0:
        return 0.0
    fill = 1.0 - math.exp(-(hash_func_num * items) / bit_array_size)
    return min(1.0, fill**hash_func_num)
