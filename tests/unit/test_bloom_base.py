"""
Unit tests for the basic Bloom Filter implementation.
"""

import random
import string
import unittest

from ordinal_bloom.algorithms.bloom.base import BasicBloomFilter
from ordinal_bloom.core.exceptions import InvalidParameterError


class TestBasicBloomFilter(unittest.TestCase):
    """Test cases for BasicBloomFilter."""

    def test_init(self):
        """Test initialization with valid and invalid parameters."""
        bf = BasicBloomFilter(0.01, 1000)
        # m = -(n * ln(p)) / (ln(2)^2) ≈ 9585.06 bits, k = (m/n) * ln(2) ≈ 6.64
        self.assertEqual(bf.bit_array_size, 9586)
        self.assertEqual(bf.hash_func_num, 7)
        self.assertEqual(bf.false_positive_rate, 0.01)
        self.assertEqual(bf.capacity, 1000)
        self.assertEqual(len(bf._cells), (9586 + 7) // 8)
        self.assertTrue(bf.is_empty())

        # Valid but extreme rate
        bf = BasicBloomFilter(0.5, 100)
        self.assertEqual(bf.hash_func_num, 1)

        # Invalid false_positive_rate
        for rate in (0.0, 1.0, -0.1, 1.5):
            with self.assertRaises(InvalidParameterError, msg=f"rate={rate}"):
                BasicBloomFilter(rate, 100)

        # Invalid capacity
        with self.assertRaises(InvalidParameterError):
            BasicBloomFilter(0.01, 0)

    def test_add_and_contains(self):
        """Test adding items and checking for membership."""
        bf = BasicBloomFilter(0.01, 1000)
        bf.add("alice")

        self.assertTrue(bf.contains("alice"))
        self.assertTrue("alice" in bf)
        self.assertTrue(bf.query("alice"))
        self.assertFalse(bf.contains("zzz_not_added"))
        self.assertEqual(bf.items_processed, 1)

        bf.update("bob")
        self.assertTrue(bf.contains("bob"))
        self.assertEqual(bf.items_processed, 2)

    def test_different_data_types(self):
        """Test that the filter works with every supported element type."""
        bf = BasicBloomFilter(0.01, 100)
        items = ["string", 123, -7, 2**70, 3.14, True, b"byte_string", bytearray(b"ba")]
        bf.add_all(items)

        for item in items:
            self.assertTrue(bf.contains(item), f"Item {item!r} not found.")

        self.assertFalse(bf.contains(1234))
        self.assertFalse(bf.contains("string "))

        with self.assertRaises(TypeError):
            bf.add({"key": "value"})
        with self.assertRaises(TypeError):
            bf.contains(None)

    def test_signed_zero_membership(self):
        """Adding 0.0 makes the equal value -0.0 a member too."""
        bf = BasicBloomFilter(0.01, 100)
        bf.add(0.0)
        self.assertTrue(bf.contains(-0.0))

    def test_encoder(self):
        """Test a custom encoder for elements without a byte form."""
        bf = BasicBloomFilter(0.01, 100, encoder=lambda pair: repr(sorted(pair)).encode())
        bf.add({"b", "a"})
        self.assertTrue(bf.contains({"a", "b"}))
        self.assertFalse(bf.contains({"a", "c"}))

    def test_no_false_negatives(self):
        """Test that false negatives never occur, even over capacity."""
        bf = BasicBloomFilter(0.01, 1000)

        test_items = [f"item-{i}" for i in range(2000)]
        for item in test_items:
            bf.add(item)

        missing = [item for item in test_items if not bf.contains(item)]
        self.assertEqual(missing, [], "False negatives detected!")

    def test_false_positive_rate(self):
        """Test that false positives stay within twice the configured rate."""
        target_fpp = 0.01
        bf = BasicBloomFilter(target_fpp, 1000)

        rng = random.Random(1234)
        added = set()
        while len(added) < 1000:
            added.add("".join(rng.choices(string.ascii_letters, k=12)))
        bf.add_all(added)

        false_positives = 0
        probes = 0
        while probes < 10000:
            candidate = "".join(rng.choices(string.ascii_letters, k=13))
            if candidate in added:
                continue
            probes += 1
            if bf.contains(candidate):
                false_positives += 1

        observed = false_positives / probes
        self.assertLessEqual(observed, 2 * target_fpp)

    def test_monotonic_fullness(self):
        """Adding more elements never turns a positive answer negative."""
        bf = BasicBloomFilter(0.05, 200)
        probes = [f"probe-{i}" for i in range(300)]
        previously_true = set()

        for i in range(400):
            bf.add(f"element-{i}")
            now_true = {p for p in probes if bf.contains(p)}
            self.assertTrue(previously_true <= now_true)
            previously_true = now_true

    def test_bits_only_turn_on(self):
        """Every add leaves all previously set bits set."""
        bf = BasicBloomFilter(0.05, 100)
        before = bytes(bf._cells)
        for i in range(150):
            bf.add(i)
            after = bytes(bf._cells)
            for old, new in zip(before, after):
                self.assertEqual(old & new, old)
            before = after

    def test_clear(self):
        """Clearing leaves the filter identical to a freshly built one."""
        bf = BasicBloomFilter(0.01, 100)
        items_added = [f"item-{i}" for i in range(50)]
        bf.add_all(items_added)
        self.assertFalse(bf.is_empty())

        bf.clear()

        fresh = BasicBloomFilter(0.01, 100)
        self.assertTrue(bf.is_empty())
        self.assertEqual(bf.items_processed, 0)
        self.assertEqual(bf.bit_array_size, fresh.bit_array_size)
        self.assertEqual(bf.hash_func_num, fresh.hash_func_num)
        self.assertEqual(bf._cells.tobytes(), fresh._cells.tobytes())
        for item in items_added:
            self.assertFalse(bf.contains(item))

        # Usable again after clear
        bf.add("item-0")
        self.assertTrue(bf.contains("item-0"))

    def test_sizing_determinism(self):
        """Filters built from the same parameters are identical."""
        first = BasicBloomFilter(0.02, 500)
        second = BasicBloomFilter(0.02, 500)
        self.assertEqual(first.bit_array_size, second.bit_array_size)
        self.assertEqual(first.hash_func_num, second.hash_func_num)

        for bf in (first, second):
            bf.add_all(range(100))
        self.assertEqual(first._cells.tobytes(), second._cells.tobytes())

    def test_degenerate_sizing(self):
        """A tiny filter still has at least one round and rejects on an empty array."""
        bf = BasicBloomFilter(0.9, 10)
        self.assertEqual(bf.hash_func_num, 1)
        self.assertFalse(bf.contains("anything"))
        bf.add("anything")
        self.assertTrue(bf.contains("anything"))

    def test_estimate_cardinality(self):
        """Test distinct element estimation from the fill ratio."""
        bf = BasicBloomFilter(0.01, 1000)
        self.assertEqual(bf.estimate_cardinality(), 0)

        for i in range(500):
            bf.add(f"item-{i}")
        self.assertAlmostEqual(bf.estimate_cardinality(), 500, delta=500 * 0.15)

        # Repeats do not inflate the estimate past items processed
        for i in range(10):
            bf.add("item-0")
        self.assertLessEqual(bf.estimate_cardinality(), bf.items_processed)

    def test_false_positive_probability(self):
        """Test the fill-based false positive estimate."""
        bf = BasicBloomFilter(0.01, 1000)
        self.assertEqual(bf.false_positive_probability(), 0.0)

        for i in range(200):
            bf.add(f"item-{i}")
        partial = bf.false_positive_probability()
        self.assertGreater(partial, 0.0)
        self.assertLess(partial, 0.01)

        for i in range(200, 1000):
            bf.add(f"item-{i}")
        full = bf.false_positive_probability()
        self.assertGreater(full, partial)
        self.assertAlmostEqual(full, 0.01, delta=0.005)

    def test_get_stats(self):
        """Test the statistics report."""
        bf = BasicBloomFilter(0.1, 100)
        for i in range(500):
            bf.add(f"item-{i}")

        stats = bf.get_stats()
        self.assertEqual(stats["type"], "BasicBloomFilter")
        self.assertEqual(stats["bit_array_size"], bf.bit_array_size)
        self.assertEqual(stats["hash_func_num"], bf.hash_func_num)
        self.assertEqual(stats["items_processed"], 500)
        self.assertEqual(stats["set_bits"], bf.set_bits())
        self.assertIn("byte_stats", stats)
        self.assertGreater(stats["memory_bytes"], len(bf._cells))
        self.assertEqual(stats["target_fpp"], 0.1)
        self.assertGreater(stats["current_fpp"], 0.1)
        self.assertEqual(stats["error_margin"], "high")

    def test_repr(self):
        bf = BasicBloomFilter(0.01, 1000)
        self.assertEqual(
            repr(bf),
            "BasicBloomFilter(false_positive_rate=0.01, capacity=1000, "
            "bit_array_size=9586, hash_func_num=7)",
        )


if __name__ == "__main__":
    unittest.main()
