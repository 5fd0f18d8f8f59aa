"""
Basic Bloom Filter Demo for ordinal-bloom.

This example demonstrates how to use the basic Bloom Filter for space-efficient
set membership testing. It highlights its probabilistic nature (false
positives) and its guarantee of no false negatives.
"""

from ordinal_bloom import BasicBloomFilter, InvalidParameterError


def demonstrate_basic_usage():
    """Demonstrate Bloom Filter initialization, adding, and checking."""
    print("\n=== Basic Bloom Filter Demo ===")

    # Expecting ~10,000 items with a 1% (0.01) false positive rate
    bf = BasicBloomFilter(false_positive_rate=0.01, capacity=10000)

    print("Bloom Filter parameters:")
    print(f"  Capacity: {bf.capacity:,}")
    print(f"  Target false positive rate: {bf.false_positive_rate:.1%}")
    print(f"  Calculated filter size (bits): {bf.bit_array_size:,} bits")
    print(f"  Calculated number of hashes: {bf.hash_func_num}")
    print(f"  Estimated memory usage: {bf.estimate_size():,} bytes")

    items_to_add = ["apple", "banana", "cherry", "date", "fig", "grape", "kiwi"]
    print("\nAdding items to the filter...")
    for item in items_to_add:
        bf.add(item)
        print(f"  Added '{item}'")

    print("\nChecking membership:")
    print("  (Note: 'False' means DEFINITELY NOT present)")
    print("  (Note: 'True' means POSSIBLY present - could be a false positive)")
    for item in items_to_add + ["orange", "pear", "plum"]:
        print(f"  '{item}' in filter? {item in bf}")


def demonstrate_fpp_and_fill_ratio():
    """Show how fill ratio affects the estimated False Positive Probability."""
    print("\n=== FPP vs. Fill Ratio Demo ===")

    n = 1000
    bf = BasicBloomFilter(false_positive_rate=0.05, capacity=n)
    items = [f"item_{i}" for i in range(n * 2)]

    added = 0
    for step_target in (int(n * 0.1), int(n * 0.5), n, int(n * 1.5)):
        bf.add_all(items[added:step_target])
        added = step_target
        print(f"\nAfter adding {added} items:")
        print(f"  Filter fill ratio: {bf.fill_ratio():.2%}")
        print(f"  Estimated current FPP: {bf.false_positive_probability():.4f}")
        print(f"  Estimated cardinality: {bf.estimate_cardinality()}")

    print("\nNote: As the filter fills (especially beyond capacity),")
    print("the actual false positive probability increases above the target rate.")


def demonstrate_invalid_parameters():
    """Show how invalid construction parameters are reported."""
    print("\n=== Invalid Parameter Demo ===")
    for rate in (0.0, 1.0, 1.5):
        try:
            BasicBloomFilter(false_positive_rate=rate, capacity=100)
        except InvalidParameterError as e:
            print(f"  rate={rate}: {e}")


if __name__ == "__main__":
    demonstrate_basic_usage()
    demonstrate_fpp_and_fill_ratio()
    demonstrate_invalid_parameters()
