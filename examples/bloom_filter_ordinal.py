"""
Ordinal Bloom Filter Demo for ordinal-bloom.

This example shows the ordinal variant, whose cells remember the highest hash
round that touched them, and compares its false positives with the basic
filter built from the same parameters.
"""

import random
import string

from ordinal_bloom import BasicBloomFilter, OrdinalBloomFilter


def demonstrate_ordinal_usage():
    """Demonstrate adding, checking, partial round matches, and clearing."""
    print("\n=== Ordinal Bloom Filter Demo ===")

    obf = OrdinalBloomFilter(false_positive_rate=0.01, capacity=1000)
    print(f"  {obf!r}")

    for value in (42, 7, 1999):
        obf.add(value)

    for value in (42, 7, 1999, 8, 100):
        print(
            f"  {value}: contains={obf.contains(value)}, "
            f"matched rounds={obf.matched_rounds(value)}/{obf.hash_func_num}"
        )

    print(f"\n  Cell values in use: {obf.round_histogram()}")

    obf.clear()
    print(f"  After clear, 42 in filter? {42 in obf}")


def compare_false_positives(capacity=2000, probes=20000):
    """Fill both filters to capacity and measure their false positive rates."""
    print("\n=== Basic vs. Ordinal False Positives ===")

    rng = random.Random(2024)
    added = {"".join(rng.choices(string.ascii_lowercase, k=10)) for _ in range(capacity)}

    basic = BasicBloomFilter(false_positive_rate=0.01, capacity=capacity)
    ordinal = OrdinalBloomFilter(false_positive_rate=0.01, capacity=capacity)
    basic.add_all(added)
    ordinal.add_all(added)

    basic_fp = ordinal_fp = tested = 0
    while tested < probes:
        candidate = "".join(rng.choices(string.ascii_lowercase, k=11))
        if candidate in added:
            continue
        tested += 1
        basic_fp += candidate in basic
        ordinal_fp += candidate in ordinal

    for name, bf, fp in (("basic", basic, basic_fp), ("ordinal", ordinal, ordinal_fp)):
        print(
            f"  {name:>8}: observed FPR {fp / tested:.5f}, "
            f"estimated {bf.false_positive_probability():.5f}, "
            f"memory {bf.estimate_size():,} bytes"
        )


def demonstrate_transfer():
    """Move a filter's state into a new owner."""
    print("\n=== Ownership Transfer Demo ===")

    source = OrdinalBloomFilter(false_positive_rate=0.01, capacity=100)
    source.add("alice")
    target = source.transfer()
    print(f"  target has 'alice'? {'alice' in target}")
    print(f"  source after transfer: {source!r}")


if __name__ == "__main__":
    demonstrate_ordinal_usage()
    compare_false_positives()
    demonstrate_transfer()
