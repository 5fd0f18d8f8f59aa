"""
Hashing functions for ordinal-bloom.

Elements are reduced to a stable byte string, hashed once with the 128-bit
x64 variant of MurmurHash3, and the two 64-bit halves are combined with the
round index to produce as many bucket indices as the filter needs
(Kirsch-Mitzenmacher double hashing).

References:
    - Kirsch, A., & Mitzenmacher, M. (2006). Less hashing, same performance:
      Building a better Bloom filter. ESA 2006, LNCS 4168, 456-467.
"""

import struct
from typing import Any, Tuple

import mmh3

HASH_SEED = 0
MASK_64 = 0xFFFFFFFFFFFFFFFF

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def encode_item(item: Any) -> bytes:
    """
    Convert an element to the byte string that gets hashed.

    Equal values of the supported types always encode to identical bytes, so
    hashing the result is well defined. There is deliberately no repr() fallback:
    types without a stable byte form must supply one via __bytes__ or an encoder.

    Args:
        item: bytes-like, str, bool, int, float, or an object implementing __bytes__.

    Returns:
        The byte representation of the element.

    Raises:
        TypeError: If the element has no byte representation.
    """
    if isinstance(item, bytes):
        return item
    if isinstance(item, (bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf-8")
    # bool is a subclass of int, check it first
    if isinstance(item, bool):
        return b"\x01" if item else b"\x00"
    if isinstance(item, int):
        if _INT64_MIN <= item <= _INT64_MAX:
            return item.to_bytes(8, "little", signed=True)
        # Widen to whole 64-bit words
        width = ((item.bit_length() + 1 + 63) // 64) * 8
        return item.to_bytes(width, "little", signed=True)
    if isinstance(item, float):
        # -0.0 == 0.0, so both must hash alike
        if item == 0.0:
            item = 0.0
        return struct.pack("<d", item)
    if hasattr(type(item), "__bytes__"):
        return bytes(item)
    raise TypeError(
        f"Cannot hash element of type {type(item).__name__}: "
        f"implement __bytes__ or pass an encoder"
    )


def murmurhash3_x64_128(data: bytes, seed: int = HASH_SEED) -> Tuple[int, int]:
    """
    MurmurHash3 (x64, 128-bit variant) split into two unsigned 64-bit words.

    Args:
        data: The bytes to hash.
        seed: 32-bit seed.

    Returns:
        Tuple (hash_a, hash_b) of the low and high 64-bit halves.
    """
    hash_a, hash_b = mmh3.hash64(data, seed=seed, x64arch=True, signed=False)
    return hash_a, hash_b


def hash_round(hash_a: int, hash_b: int, n: int, bit_array_size: int) -> int:
    """
    Compute the bucket index for hash round `n`.

    The linear combination wraps at 64 bits before the modulo reduction.

    Args:
        hash_a: First 64-bit half of the element hash.
        hash_b: Second 64-bit half of the element hash.
        n: Round index.
        bit_array_size: Array length; the result is in [0, bit_array_size).

    Returns:
        The bucket index.
    """
    return ((hash_a + n * hash_b) & MASK_64) % bit_array_size
