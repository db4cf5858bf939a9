import unittest

from moviebook.sequences import get_most_popular, remove_duplicates, rotate_left


class TestRotateLeft(unittest.TestCase):
    def test_no_op_cases(self) -> None:
        self.assertEqual(rotate_left([], 3), [])
        self.assertEqual(rotate_left([1], 5), [1])
        self.assertEqual(rotate_left([1, 2, 3], 0), [1, 2, 3])
        self.assertEqual(rotate_left([1, 2, 3], -1), [1, 2, 3])

    def test_rotates(self) -> None:
        self.assertEqual(rotate_left([1, 2, 3, 4], 1), [2, 3, 4, 1])
        self.assertEqual(rotate_left([1, 2, 3, 4], 3), [4, 1, 2, 3])

    def test_wraps_past_the_end(self) -> None:
        self.assertEqual(rotate_left([1, 2, 3], 3), [1, 2, 3])
        self.assertEqual(rotate_left([1, 2, 3], 4), [2, 3, 1])

    def test_returns_a_copy(self) -> None:
        items = [1, 2]
        rotated = rotate_left(items, 0)
        rotated.append(3)
        self.assertEqual(items, [1, 2])


class TestRemoveDuplicates(unittest.TestCase):
    def test_keeps_first_seen_order(self) -> None:
        self.assertEqual(remove_duplicates([3, 1, 3, 2, 1]), [3, 1, 2])

    def test_custom_matching(self) -> None:
        words = ["Apple", "avocado", "banana", "APPLE"]
        result = remove_duplicates(words, matching=lambda a, b: a.lower() == b.lower())
        self.assertEqual(result, ["Apple", "avocado", "banana"])

    def test_empty(self) -> None:
        self.assertEqual(remove_duplicates([]), [])


class TestGetMostPopular(unittest.TestCase):
    def test_orders_by_occurrences(self) -> None:
        self.assertEqual(get_most_popular([1, 2, 2, 3, 3, 3]), [3, 2, 1])

    def test_ties_keep_first_seen_order(self) -> None:
        self.assertEqual(get_most_popular(["b", "a", "a", "b", "c"]), ["b", "a", "c"])

    def test_caps(self) -> None:
        items = [5, 5, 5, 4, 4, 3]
        self.assertEqual(get_most_popular(items, top_cap=2), [5, 4])
        self.assertEqual(get_most_popular(items, bottom_cap=1), [4, 3])
        self.assertEqual(get_most_popular(items, bottom_cap=1, top_cap=2), [4])

    def test_caps_are_clamped(self) -> None:
        items = [1, 1, 2]
        self.assertEqual(get_most_popular(items, top_cap=10), [1, 2])
        self.assertEqual(get_most_popular(items, bottom_cap=-3), [1, 2])
        self.assertEqual(get_most_popular(items, bottom_cap=2), [])
        self.assertEqual(get_most_popular(items, bottom_cap=5, top_cap=10), [])

    def test_unusual_top_caps(self) -> None:
        items = [1, 1, 2, 3]
        self.assertEqual(get_most_popular(items, top_cap=-1), [])
        self.assertEqual(get_most_popular(items, bottom_cap=2, top_cap=1), [3])
        self.assertEqual(get_most_popular(items, top_cap=0), [])


if __name__ == "__main__":
    unittest.main()
