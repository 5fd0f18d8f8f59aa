"""
Base classes and interfaces for ordinal-bloom membership filters.

This module defines the abstract base class shared by the filter variants:
parameter handling and sizing, element hashing, ownership transfer, and the
statistics hooks used for inspecting a filter's state.
"""

import abc
import array
import sys
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    NoReturn,
    Optional,
    Protocol,
    Tuple,
    TypeVar,
)

from ordinal_bloom.core.hash import encode_item, murmurhash3_x64_128
from ordinal_bloom.core.sizing import Sizing, compute_sizing, expected_false_positive_rate

T = TypeVar("T")  # Type for the elements being tested


class ByteEncodable(Protocol):
    """Protocol for elements that provide their own stable byte representation."""

    def __bytes__(self) -> bytes:
        """Return the bytes that identify this element."""
        ...


class MembershipFilter(Generic[T], abc.ABC):
    """
    Abstract base class for approximate membership filters.

    A filter is sized once at construction from a target false positive rate and
    an expected capacity, and is never resized. Elements are hashed and discarded;
    nothing about them is stored except the cells their hash rounds touch.

    Filters own their cell array exclusively. Copying is not supported; use
    transfer(), take_from() or swap() to move state between instances.
    Instances are not thread-safe.
    """

    # Everything moved by transfer(), take_from() and swap()
    _STATE_FIELDS = (
        "_false_positive_rate",
        "_capacity",
        "_encoder",
        "_bit_array_size",
        "_hash_func_num",
        "_cells",
        "_items_processed",
    )

    def __init__(
        self,
        false_positive_rate: float,
        capacity: int,
        encoder: Optional[Callable[[T], bytes]] = None,
    ):
        """
        Initialize a new filter.

        Args:
            false_positive_rate: Target false positive rate (between 0 and 1).
            capacity: Expected number of elements to be added.
            encoder: Optional function turning an element into bytes.
                     Defaults to encode_item.

        Raises:
            InvalidParameterError: If the parameters cannot produce a valid filter.
            TypeError: If capacity is not an integer.
        """
        sizing = compute_sizing(false_positive_rate, capacity)
        self._check_sizing(sizing)

        self._false_positive_rate = false_positive_rate
        self._capacity = capacity
        self._encoder: Callable[[Any], bytes] = encoder or encode_item

        self._bit_array_size = sizing.bit_array_size
        self._hash_func_num = sizing.hash_func_num
        self._cells = self._allocate(self._bit_array_size)
        self._items_processed = 0

    def _check_sizing(self, sizing: Sizing) -> None:
        """
        Hook for variants to reject a computed sizing before allocation.

        Args:
            sizing: The sizing derived from the constructor parameters.
        """

    @abc.abstractmethod
    def _allocate(self, bit_array_size: int) -> array.array:
        """
        Create a zeroed cell array for the given number of buckets.

        Args:
            bit_array_size: Number of buckets.

        Returns:
            The new cell array.
        """
        pass

    def _hash_pair(self, elem: T) -> Tuple[int, int]:
        """Hash an element once, returning the two 64-bit halves."""
        return murmurhash3_x64_128(self._encoder(elem))

    @abc.abstractmethod
    def add(self, elem: T) -> None:
        """
        Add an element to the filter.

        Args:
            elem: The element to add.
        """
        self._items_processed += 1

    @abc.abstractmethod
    def contains(self, elem: T) -> bool:
        """
        Test whether an element might have been added.

        Args:
            elem: The element to test.

        Returns:
            True if the element might be in the set, False if it definitely is not.
        """
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """
        Reset every cell to zero, keeping the filter's parameters.

        Derived classes must reallocate their cells and call super().clear().
        """
        self._items_processed = 0

    @abc.abstractmethod
    def is_empty(self) -> bool:
        """Return True if no cell has been written since construction or clear()."""
        pass

    @abc.abstractmethod
    def fill_ratio(self) -> float:
        """Return the fraction of buckets that have been written."""
        pass

    @abc.abstractmethod
    def false_positive_probability(self) -> float:
        """
        Estimate the current false positive probability from the cell contents.

        Returns:
            The estimated probability, between 0 and 1.
        """
        pass

    def update(self, elem: T) -> None:
        """Add an element. Alias of add()."""
        self.add(elem)

    def query(self, elem: T) -> bool:
        """Test an element. Alias of contains()."""
        return self.contains(elem)

    def add_all(self, elems: Iterable[T]) -> None:
        """
        Add every element of an iterable.

        Args:
            elems: The elements to add.
        """
        for elem in elems:
            self.add(elem)

    def __contains__(self, elem: Any) -> bool:
        return self.contains(elem)

    # --- Ownership ---

    def __copy__(self) -> NoReturn:
        raise TypeError(
            f"{self.__class__.__name__} cannot be copied; use transfer() to move it"
        )

    def __deepcopy__(self, memo: Dict[int, Any]) -> NoReturn:
        raise TypeError(
            f"{self.__class__.__name__} cannot be copied; use transfer() to move it"
        )

    def __reduce_ex__(self, protocol: Any) -> NoReturn:
        raise TypeError(f"{self.__class__.__name__} cannot be pickled")

    def _check_same_type(self, other: "MembershipFilter[T]") -> None:
        """
        Helper method to check if another filter is of the same type.

        Args:
            other: Another filter to check.

        Raises:
            TypeError: If other is not of the same type.
        """
        if not isinstance(other, self.__class__) or not isinstance(
            self, other.__class__
        ):
            raise TypeError(
                f"Cannot exchange state between {self.__class__.__name__} "
                f"and {other.__class__.__name__}"
            )

    def _release(self) -> Dict[str, Any]:
        """
        Hand over this filter's state and leave it empty.

        The emptied filter keeps its configuration but has no cells and no rounds.
        """
        state = {field: getattr(self, field) for field in self._STATE_FIELDS}
        self._bit_array_size = 0
        self._hash_func_num = 0
        self._cells = self._allocate(0)
        self._items_processed = 0
        return state

    def transfer(self) -> "MembershipFilter[T]":
        """
        Move this filter's state into a new instance.

        Afterwards this filter is empty: it has no cells, add() does nothing and
        contains() returns False. The new filter shares nothing with it.

        Returns:
            A new filter of the same class owning the moved state.
        """
        target = self.__class__.__new__(self.__class__)
        for field, value in self._release().items():
            setattr(target, field, value)
        return target

    def take_from(self, other: "MembershipFilter[T]") -> None:
        """
        Replace this filter's state with another's, leaving the other empty.

        Taking from itself is a no-op.

        Args:
            other: A filter of the same class.

        Raises:
            TypeError: If other is not of the same class.
        """
        self._check_same_type(other)
        if other is self:
            return
        for field, value in other._release().items():
            setattr(self, field, value)

    def swap(self, other: "MembershipFilter[T]") -> None:
        """
        Exchange state with another filter of the same class.

        Args:
            other: A filter of the same class.

        Raises:
            TypeError: If other is not of the same class.
        """
        self._check_same_type(other)
        for field in self._STATE_FIELDS:
            mine = getattr(self, field)
            setattr(self, field, getattr(other, field))
            setattr(other, field, mine)

    # --- Properties ---

    @property
    def false_positive_rate(self) -> float:
        """Target false positive rate the filter was sized for."""
        return self._false_positive_rate

    @property
    def capacity(self) -> int:
        """Expected number of elements the filter was sized for."""
        return self._capacity

    @property
    def bit_array_size(self) -> int:
        """Number of buckets in the cell array."""
        return self._bit_array_size

    @property
    def hash_func_num(self) -> int:
        """Number of hash rounds per element."""
        return self._hash_func_num

    @property
    def items_processed(self) -> int:
        """Number of add() calls since construction or the last clear()."""
        return self._items_processed

    # --- Statistics ---

    def estimate_size(self) -> int:
        """
        Estimate the current memory usage of this filter in bytes.

        Returns:
            Estimated memory usage in bytes.
        """
        size = sys.getsizeof(self)
        if hasattr(self, "__dict__"):
            size += sys.getsizeof(self.__dict__)
        size += sys.getsizeof(self._cells)
        return size

    def error_bounds(self) -> Dict[str, Any]:
        """
        Get the theoretical error bounds for this filter.

        The theoretical rate assumes every add() was a distinct element.

        Returns:
            A dictionary with the target and current theoretical false positive rates
            and a coarse error margin.
        """
        bounds: Dict[str, Any] = {"target_fpp": self._false_positive_rate}
        if self._bit_array_size == 0 or self._items_processed == 0:
            return bounds

        bounds["current_theoretical_fpp"] = expected_false_positive_rate(
            self._bit_array_size, self._hash_func_num, self._items_processed
        )

        fill = self.fill_ratio()
        if fill < 0.5:
            bounds["error_margin"] = "low"
        elif fill < 0.8:
            bounds["error_margin"] = "moderate"
        else:
            bounds["error_margin"] = "high"

        return bounds

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the filter.

        Derived classes should extend this with their own fields.

        Returns:
            A dictionary containing various statistics about the filter state.
        """
        stats: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "false_positive_rate": self._false_positive_rate,
            "capacity": self._capacity,
            "bit_array_size": self._bit_array_size,
            "hash_func_num": self._hash_func_num,
            "items_processed": self._items_processed,
            "memory_bytes": self.estimate_size(),
            "fill_ratio": self.fill_ratio(),
            "current_fpp": self.false_positive_probability(),
        }

        if self._items_processed > 0:
            stats["items_ratio"] = self._items_processed / self._capacity

        stats.update(self.error_bounds())
        return stats

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"false_positive_rate={self._false_positive_rate!r}, "
            f"capacity={self._capacity!r}, "
            f"bit_array_size={self._bit_array_size}, "
            f"hash_func_num={self._hash_func_num})"
        )
