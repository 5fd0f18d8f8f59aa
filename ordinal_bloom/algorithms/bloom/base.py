"""
Basic Bloom Filter implementation for ordinal-bloom.

This module provides the classic Bloom Filter, a space-efficient probabilistic
data structure used for testing set membership with tunable false positive
rates and no false negatives. Each bucket is a single bit; an element sets the
bit chosen by each of its hash rounds, and is reported present only if all of
those bits are set.

References:
    - Bloom, B. H. (1970). Space/time trade-offs in hash coding with allowable errors.
      Communications of the ACM, 13(7), 422-426.
"""

import array
import math
from collections import Counter
from typing import Any, Callable, Dict, Optional, TypeVar

from ordinal_bloom.core.base import MembershipFilter
from ordinal_bloom.core.hash import hash_round

T = TypeVar("T")  # Type for the elements being tested


class BasicBloomFilter(MembershipFilter[T]):
    """
    Bloom Filter for efficient set membership testing.

    False positives are possible, but false negatives are not: a query returns
    either "possibly in set" or "definitely not in set". Hash rounds are numbered
    from 0 and every round sets one bit, so adding elements only ever turns bits on.

    Example:
        # Create a filter with 1% false positive rate for 1000 elements
        bloom = BasicBloomFilter(false_positive_rate=0.01, capacity=1000)

        bloom.add("apple")
        bloom.add("banana")

        bloom.contains("apple")  # Returns True
        "orange" in bloom  # Returns False (with high probability)
    """

    def __init__(
        self,
        false_positive_rate: float,
        capacity: int,
        encoder: Optional[Callable[[T], bytes]] = None,
    ):
        """
        Initialize a new Bloom filter.

        Args:
            false_positive_rate: Target false positive rate (between 0 and 1).
            capacity: Expected number of elements to be added to the filter.
            encoder: Optional function turning an element into bytes.

        Raises:
            InvalidParameterError: If false_positive_rate is not between 0 and 1,
                                   or capacity is less than 1.
            TypeError: If capacity is not an integer.
        """
        super().__init__(false_positive_rate, capacity, encoder)

    def _allocate(self, bit_array_size: int) -> array.array:
        # Packed bits, rounded up to whole bytes
        return array.array("B", bytes((bit_array_size + 7) // 8))

    def _set_bit(self, position: int) -> None:
        """
        Set a bit at the given position.

        Args:
            position: Bit position to set.
        """
        self._cells[position >> 3] |= 1 << (position & 7)

    def _test_bit(self, position: int) -> bool:
        """
        Test if a bit is set at the given position.

        Args:
            position: Bit position to test.

        Returns:
            True if the bit is set, False otherwise.
        """
        return bool(self._cells[position >> 3] & (1 << (position & 7)))

    def add(self, elem: T) -> None:
        """
        Add an element to the Bloom filter.

        Sets the bit chosen by each hash round 0 .. hash_func_num - 1.

        Args:
            elem: The element to add.
        """
        if self._bit_array_size == 0:
            return
        super().add(elem)

        hash_a, hash_b = self._hash_pair(elem)
        for i in range(self._hash_func_num):
            self._set_bit(hash_round(hash_a, hash_b, i, self._bit_array_size))

    def contains(self, elem: T) -> bool:
        """
        Test if an element might be in the set.

        Args:
            elem: The element to test.

        Returns:
            True if the element might be in the set, False if definitely not in the set.
        """
        if self._bit_array_size == 0:
            return False

        hash_a, hash_b = self._hash_pair(elem)
        for i in range(self._hash_func_num):
            if not self._test_bit(hash_round(hash_a, hash_b, i, self._bit_array_size)):
                return False
        return True

    def clear(self) -> None:
        """
        Reset the filter to its initial empty state.

        This method clears all bits but keeps the same parameters (size, hash count).
        """
        self._cells = self._allocate(self._bit_array_size)
        super().clear()

    def is_empty(self) -> bool:
        """
        Check if the filter is empty (all bits are zero).

        Returns:
            True if the filter is empty, False otherwise.
        """
        return not any(self._cells)

    def set_bits(self) -> int:
        """Count the bits currently set to 1."""
        return sum(bin(byte).count("1") for byte in self._cells)

    def fill_ratio(self) -> float:
        """Return the fraction of bits set to 1."""
        if self._bit_array_size == 0:
            return 0.0
        return self.set_bits() / self._bit_array_size

    def false_positive_probability(self) -> float:
        """
        Calculate the current false positive probability based on the fill ratio.

        This provides an *estimate* based on the current state, not the initial
        target rate: FPP ≈ (fraction_bits_set)^k.

        Returns:
            Current estimated false positive probability.
        """
        if self._bit_array_size == 0:
            return 0.0
        return min(1.0, self.fill_ratio() ** self._hash_func_num)

    def estimate_cardinality(self) -> int:
        """
        Estimate the number of distinct elements added to the filter.

        Uses n ≈ -m * ln(1 - X/m) / k, where X is the number of set bits. The
        estimate degrades as the filter saturates and is capped at items_processed.

        Returns:
            Estimated number of distinct elements.
        """
        set_bits = self.set_bits()
        if set_bits == 0 or self._hash_func_num == 0:
            return 0
        if set_bits >= self._bit_array_size:
            return self._items_processed

        estimate = (
            -self._bit_array_size
            * math.log(1.0 - set_bits / self._bit_array_size)
            / self._hash_func_num
        )
        return min(max(0, int(round(estimate))), self._items_processed)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the Bloom filter.

        Extends the base statistics with the set bit count, the estimated number of
        distinct elements and the distribution of set bits per byte.

        Returns:
            A dictionary containing various statistics about the filter state.
        """
        stats = super().get_stats()
        stats["set_bits"] = self.set_bits()
        stats["estimated_unique_items"] = self.estimate_cardinality()

        # Group bytes by their population count
        byte_distribution = Counter(bin(byte).count("1") for byte in self._cells)
        stats["byte_stats"] = {
            "zero_bytes": byte_distribution.get(0, 0),
            "full_bytes": byte_distribution.get(8, 0),
            "distribution": {
                str(bits): count for bits, count in sorted(byte_distribution.items())
            },
        }

        if self._items_processed > 0:
            stats["bits_per_item"] = self._bit_array_size / self._items_processed

        return stats
