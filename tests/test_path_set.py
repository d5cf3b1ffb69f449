import unittest
import random
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polymaze.algo.path_set import PathSets

class TestPathSets(unittest.TestCase):
    def test_find_untracked(self):
        sets = PathSets()
        self.assertIsNone(sets.find(3))
        self.assertFalse(sets.same_set(3, 3))

    def test_join_creates_set(self):
        sets = PathSets()
        joined = sets.join(1, 2)
        self.assertEqual(joined, {1, 2})
        self.assertEqual(len(sets), 1)
        self.assertTrue(sets.same_set(1, 2))

    def test_join_extends_tracked_set(self):
        sets = PathSets([{1, 2}])
        sets.join(3, 2)
        sets.join(1, 4)
        self.assertEqual(len(sets), 1)
        self.assertEqual(sets.find(4), {1, 2, 3, 4})

    def test_join_merges_sets(self):
        a, b = {1, 2}, {5}
        sets = PathSets([a, b, {9}])
        merged = sets.join(5, 1)

        self.assertEqual(merged, {1, 2, 5})
        self.assertEqual(len(sets), 2)
        self.assertIs(sets.find(5), sets.find(2))
        # The smaller set is folded in and dropped
        self.assertIs(merged, a)
        self.assertFalse(any(s is b for s in sets))

    def test_join_same_set_is_noop(self):
        sets = PathSets([{1, 2}])
        sets.join(1, 2)
        self.assertEqual(len(sets), 1)
        self.assertEqual(sets.find(1), {1, 2})

    def test_track(self):
        sets = PathSets([{1, 2}])
        self.assertIs(sets.track(1), sets.find(2))
        single = sets.track(7)
        self.assertEqual(single, {7})
        self.assertEqual(len(sets), 2)

    def test_retain(self):
        a = {1, 2, 7}
        sets = PathSets([a, {3, 4}, {8}])
        sets.retain([1, 4, 8, 9])

        self.assertEqual(list(sets), [{1}, {4}, {8}])
        self.assertIs(sets.find(1), a)
        self.assertIsNone(sets.find(2))
        self.assertIsNone(sets.find(9))

        sets.retain([5])
        self.assertEqual(len(sets), 0)

    def test_partition_invariant(self):
        rng = random.Random(7)
        sets = PathSets()
        items = list(range(40))

        for _ in range(60):
            a, b = rng.choice(items), rng.choice(items)
            if rng.random() < 0.2:
                sets.track(a)
            else:
                sets.join(a, b)

            # No item in two sets, no empty sets
            seen = set()
            for item_set in sets:
                self.assertTrue(item_set)
                self.assertFalse(seen & item_set)
                seen |= item_set

        for a in items:
            for b in items:
                found_a, found_b = sets.find(a), sets.find(b)
                expected = found_a is not None and found_a is found_b
                self.assertEqual(sets.same_set(a, b), expected)
                self.assertEqual(sets.same_set(a, b), sets.same_set(b, a))
            self.assertEqual(sets.same_set(a, a), sets.find(a) is not None)

if __name__ == '__main__':
    unittest.main()
