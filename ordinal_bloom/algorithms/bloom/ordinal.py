"""
Ordinal Bloom Filter implementation for ordinal-bloom.

The ordinal variant replaces each bit with an 8-bit cell holding the highest
hash round index that has touched the bucket. Rounds are numbered from 1, so
a written cell is never zero, and an add only ever raises a cell's value.

A lookup succeeds only if, for every round i of the candidate's own hash
sequence, the bucket's stored value is at least i. A collision must therefore
have come from an element that reached an equal or later round at the same
bucket, which makes accidental matches on late rounds rarer than in a plain
Bloom filter while keeping the no-false-negative guarantee.
"""

import array
from collections import Counter
from typing import Any, Callable, Dict, Optional, TypeVar

from ordinal_bloom.core.base import MembershipFilter
from ordinal_bloom.core.exceptions import InvalidParameterError
from ordinal_bloom.core.hash import hash_round
from ordinal_bloom.core.sizing import Sizing

T = TypeVar("T")  # Type for the elements being tested


class OrdinalBloomFilter(MembershipFilter[T]):
    """
    Bloom Filter variant storing the highest hash round seen per bucket.

    Example:
        bloom = OrdinalBloomFilter(false_positive_rate=0.01, capacity=1000)

        bloom.add(42)
        bloom.contains(42)  # Returns True
        bloom.matched_rounds(7)  # How many leading rounds of 7 are covered

    The cell width limits the number of hash rounds to MAX_HASH_FUNC_NUM; a rate
    small enough to need more rounds is rejected at construction.
    """

    MAX_HASH_FUNC_NUM = 255

    def __init__(
        self,
        false_positive_rate: float,
        capacity: int,
        encoder: Optional[Callable[[T], bytes]] = None,
    ):
        """
        Initialize a new ordinal Bloom filter.

        Args:
            false_positive_rate: Target false positive rate (between 0 and 1).
            capacity: Expected number of elements to be added to the filter.
            encoder: Optional function turning an element into bytes.

        Raises:
            InvalidParameterError: If false_positive_rate is not between 0 and 1,
                                   capacity is less than 1, or the derived number
                                   of hash rounds exceeds MAX_HASH_FUNC_NUM.
            TypeError: If capacity is not an integer.
        """
        super().__init__(false_positive_rate, capacity, encoder)

    def _check_sizing(self, sizing: Sizing) -> None:
        if sizing.hash_func_num > self.MAX_HASH_FUNC_NUM:
            raise InvalidParameterError(
                f"False positive rate requires {sizing.hash_func_num} hash rounds, "
                f"but cells can only record up to {self.MAX_HASH_FUNC_NUM}"
            )

    def _allocate(self, bit_array_size: int) -> array.array:
        return array.array("B", bytes(bit_array_size))

    def add(self, elem: T) -> None:
        """
        Add an element to the filter.

        For each round i in 1 .. hash_func_num, raises the chosen cell to i if it
        holds less.

        Args:
            elem: The element to add.
        """
        if self._bit_array_size == 0:
            return
        super().add(elem)

        cells = self._cells
        hash_a, hash_b = self._hash_pair(elem)
        for i in range(1, self._hash_func_num + 1):
            position = hash_round(hash_a, hash_b, i, self._bit_array_size)
            if cells[position] < i:
                cells[position] = i

    def contains(self, elem: T) -> bool:
        """
        Test if an element might be in the set.

        Args:
            elem: The element to test.

        Returns:
            True if every round's cell holds at least that round's index,
            False if the element was definitely never added.
        """
        if self._bit_array_size == 0:
            return False
        return self.matched_rounds(elem) == self._hash_func_num

    def matched_rounds(self, elem: T) -> int:
        """
        Count the leading hash rounds of an element that the filter covers.

        Round i is covered when its cell holds a value of at least i. Counting
        stops at the first uncovered round, so the result is the largest j such
        that rounds 1 .. j are all covered. An added element always matches all
        hash_func_num rounds.

        Args:
            elem: The element to test.

        Returns:
            Number of covered leading rounds, between 0 and hash_func_num.
        """
        if self._bit_array_size == 0:
            return 0

        cells = self._cells
        hash_a, hash_b = self._hash_pair(elem)
        for i in range(1, self._hash_func_num + 1):
            if cells[hash_round(hash_a, hash_b, i, self._bit_array_size)] < i:
                return i - 1
        return self._hash_func_num

    def clear(self) -> None:
        """
        Reset the filter to its initial empty state.

        This method zeroes all cells but keeps the same parameters.
        """
        self._cells = self._allocate(self._bit_array_size)
        super().clear()

    def is_empty(self) -> bool:
        """
        Check if the filter is empty (all cells are zero).

        Returns:
            True if the filter is empty, False otherwise.
        """
        return not any(self._cells)

    def round_histogram(self) -> Dict[int, int]:
        """
        Count the cells holding each round value.

        Returns:
            Mapping from stored value (0 for untouched cells) to number of cells,
            sorted by value.
        """
        return dict(sorted(Counter(self._cells).items()))

    def fill_ratio(self) -> float:
        """Return the fraction of cells written by at least one round."""
        if self._bit_array_size == 0:
            return 0.0
        return (self._bit_array_size - self._cells.count(0)) / self._bit_array_size

    def false_positive_probability(self) -> float:
        """
        Estimate the current false positive probability from the cell values.

        A random element passes round i when its cell holds at least i, so the
        estimate is the product over rounds of the fraction of cells >= i.

        Returns:
            Current estimated false positive probability.
        """
        if self._bit_array_size == 0:
            return 0.0

        histogram = self.round_histogram()
        # Cells holding at least i, walking i downward from the top round
        at_least = [0] * (self._hash_func_num + 2)
        for i in range(self._hash_func_num, 0, -1):
            at_least[i] = at_least[i + 1] + histogram.get(i, 0)

        probability = 1.0
        for i in range(1, self._hash_func_num + 1):
            probability *= at_least[i] / self._bit_array_size
            if probability == 0.0:
                break
        return probability

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the ordinal filter.

        Extends the base statistics with the per-value cell histogram and the
        highest round value stored in any cell.

        Returns:
            A dictionary containing various statistics about the filter state.
        """
        stats = super().get_stats()
        histogram = self.round_histogram()
        stats["round_histogram"] = {str(value): n for value, n in histogram.items()}
        stats["max_round_value"] = max(self._cells) if len(self._cells) else 0
        stats["written_cells"] = self._bit_array_size - histogram.get(0, 0)
        return stats
