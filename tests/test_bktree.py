import random
import string
import sys
import types
import unittest
from pathlib import Path

# Ajouter le chemin du projet pour les imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from fuzzytree.bktree import BKTree, TreeState
from fuzzytree.damerau_levenshtein import distance, similarity
from fuzzytree.exceptions import InvalidArgumentError, InvariantViolationError
from fuzzytree.utils import phonetic_distance


def _random_words(rng, count, alphabet="abcde", max_length=6):
    return [
        "".join(rng.choice(alphabet) for _ in range(rng.randint(1, max_length)))
        for _ in range(count)
    ]


class TestConstruction(unittest.TestCase):
    def test_requires_distance_function(self):
        with self.assertRaises(InvalidArgumentError):
            BKTree(None)
        with self.assertRaises(InvalidArgumentError):
            BKTree("not callable")

    def test_rejects_negative_epsilon(self):
        with self.assertRaises(InvalidArgumentError):
            BKTree(distance, epsilon=-1)

    def test_starts_empty(self):
        tree = BKTree(distance)
        self.assertEqual(tree.state, TreeState.EMPTY)
        self.assertTrue(tree.is_empty())
        self.assertFalse(tree)
        self.assertEqual(len(tree), 0)
        self.assertIsNone(tree.root)
        self.assertEqual(tree.depth(), 0)

    def test_default_epsilon(self):
        self.assertEqual(BKTree(distance).epsilon, 1e-10)


class TestInsert(unittest.TestCase):
    def setUp(self):
        self.tree = BKTree(distance)

    def test_first_item_becomes_root(self):
        self.tree.insert("book")
        self.assertEqual(self.tree.state, TreeState.POPULATED)
        self.assertEqual(self.tree.root, "book")
        self.assertEqual(list(self.tree.query("book", 0)), ["book"])

    def test_none_is_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            self.tree.insert(None)
        self.assertEqual(self.tree.state, TreeState.EMPTY)

    def test_none_is_rejected_on_populated_tree(self):
        self.tree.extend(["book", "books"])
        with self.assertRaises(InvalidArgumentError):
            self.tree.insert(None)
        self.assertEqual(len(self.tree), 2)

    def test_extend_validates_before_inserting(self):
        with self.assertRaises(InvalidArgumentError):
            self.tree.extend(["book", None, "cake"])
        self.assertTrue(self.tree.is_empty())

    def test_add_alias(self):
        self.tree.add("cape")
        self.assertIn("cape", self.tree)

    def test_equal_distance_follows_existing_edge(self):
        self.tree.extend(["book", "books", "boon"])
        # "books" and "boon" are both at distance 1 from "book"
        self.assertEqual(self.tree.depth(), 3)
        self.tree.check_invariants()

    def test_duplicates_are_kept_under_zero_edge(self):
        self.tree.extend(["book", "book", "book"])
        self.assertEqual(len(self.tree), 3)
        self.assertEqual(list(self.tree.query("book", 0)), ["book", "book", "book"])

    def test_epsilon_absorbs_float_noise(self):
        tree = BKTree(lambda a, b: abs(a - b))
        tree.extend([0.0, 0.3, 0.1 + 0.2])
        # 0.3 and 0.1 + 0.2 differ by ~5.5e-17, well below the tolerance
        self.assertEqual(tree.depth(), 3)
        self.assertEqual(len(list(tree.query(0.3, 0))), 1)

    def test_check_invariants_detects_label_drift(self):
        state = {"offset": 0}

        def drifting(a, b):
            return distance(a, b) + state["offset"]

        tree = BKTree(drifting)
        tree.extend(["book", "cake"])
        tree.check_invariants()
        state["offset"] = 1
        with self.assertRaises(InvariantViolationError):
            tree.check_invariants()


class TestFindWithinDistance(unittest.TestCase):
    def test_typo_of_process(self):
        tree = BKTree(similarity)
        tree.extend(["Engineering", "Engineer", "Operations", "Process", "and", "the"])
        self.assertEqual(set(tree.find_within_distance("Orocess", 0.25)), {"Process"})

    def test_empty_tree_returns_nothing(self):
        tree = BKTree(distance)
        self.assertEqual(list(tree.query("anything", 3)), [])

    def test_none_value_is_rejected(self):
        tree = BKTree(distance)
        tree.insert("book")
        with self.assertRaises(InvalidArgumentError):
            tree.query(None, 1)

    def test_negative_distance_is_rejected_eagerly(self):
        tree = BKTree(distance)
        tree.insert("book")
        with self.assertRaises(InvalidArgumentError):
            tree.find_within_distance("book", -1)
        with self.assertRaises(InvalidArgumentError):
            tree.search("book", -0.5)
        self.assertEqual(len(tree), 1)
        self.assertEqual(tree.root, "book")

    def test_nan_distance_is_rejected(self):
        tree = BKTree(distance)
        with self.assertRaises(InvalidArgumentError):
            tree.query("book", float("nan"))

    def test_result_is_lazy(self):
        calls = []

        def counting(a, b):
            calls.append((a, b))
            return distance(a, b)

        tree = BKTree(counting)
        tree.extend(["book", "books", "cake", "boo", "boon", "cook"])
        calls.clear()

        result = tree.query("book", 1)
        self.assertIsInstance(result, types.GeneratorType)
        self.assertEqual(calls, [])
        self.assertEqual(next(result), "book")
        self.assertEqual(len(calls), 1)

    def test_every_item_found_at_distance_zero(self):
        words = ["book", "books", "cake", "boo", "boon", "cook", "cape", "cart"]
        tree = BKTree(distance)
        tree.extend(words)
        for word in words:
            self.assertIn(word, list(tree.query(word, 0)))
            self.assertIn(word, tree)
        self.assertNotIn("zebra", tree)

    def test_search_returns_sorted_distances(self):
        tree = BKTree(distance)
        tree.extend(["book", "books", "cake", "boo", "boon", "cook", "cape", "cart"])
        results = tree.search("book", 1)
        self.assertEqual(results[0], ("book", 0))
        self.assertEqual(
            sorted(item for item, _ in results), ["boo", "book", "books", "boon", "cook"]
        )
        self.assertEqual([d for _, d in results], sorted(d for _, d in results))

    def test_matches_linear_scan(self):
        rng = random.Random(1234)
        for _ in range(25):
            words = _random_words(rng, rng.randint(1, 80))
            tree = BKTree(distance)
            tree.extend(words)
            tree.check_invariants()
            for _ in range(10):
                query = _random_words(rng, 1)[0]
                radius = rng.randint(0, 4)
                expected = sorted(w for w in words if distance(w, query) <= radius)
                self.assertEqual(sorted(tree.query(query, radius)), expected)

    def test_matches_linear_scan_with_float_metric(self):
        rng = random.Random(99)
        points = [(rng.uniform(-10, 10), rng.uniform(-10, 10)) for _ in range(200)]

        def euclidean(a, b):
            return ((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2) ** 0.5

        tree = BKTree(euclidean)
        tree.extend(points)
        for _ in range(20):
            query = (rng.uniform(-10, 10), rng.uniform(-10, 10))
            radius = rng.uniform(0, 5)
            expected = sorted(p for p in points if euclidean(p, query) <= radius)
            self.assertEqual(sorted(tree.query(query, radius)), expected)

    def test_pruning_skips_work(self):
        rng = random.Random(5)
        words = list(set(_random_words(rng, 500, alphabet=string.ascii_lowercase, max_length=10)))
        calls = {"n": 0}

        def counting(a, b):
            calls["n"] += 1
            return distance(a, b)

        tree = BKTree(counting)
        tree.extend(words)
        calls["n"] = 0
        list(tree.query(words[0], 1))
        self.assertLess(calls["n"], len(words))

    def test_phonetic_tree(self):
        tree = BKTree(phonetic_distance)
        tree.extend(["Smith", "Smyth", "Schmidt", "Jones", "Knight", "Nite"])
        self.assertEqual(set(tree.query("Smith", 0)), {"Smith", "Smyth"})
        self.assertEqual(set(tree.query("Night", 0)), {"Knight", "Nite"})

    def test_items_lists_everything(self):
        words = ["book", "books", "cake", "boo", "book"]
        tree = BKTree(distance)
        tree.extend(words)
        self.assertEqual(sorted(tree.items()), sorted(words))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
