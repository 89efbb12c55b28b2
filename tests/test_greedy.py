import unittest

from crossword_layout.core.constants import Orientation
from crossword_layout.core.models import WordPlacement
from crossword_layout.engine.greedy import build_greedy_layout, can_add_vertical

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


class CanAddVerticalTests(unittest.TestCase):
    def test_long_words_need_bigger_surplus(self) -> None:
        self.assertTrue(can_add_vertical(3, 0, 7))
        self.assertFalse(can_add_vertical(2, 0, 7))

    def test_medium_words(self) -> None:
        self.assertTrue(can_add_vertical(2, 0, 5))
        self.assertFalse(can_add_vertical(2, 1, 6))

    def test_short_words(self) -> None:
        self.assertTrue(can_add_vertical(1, 0, 3))
        self.assertFalse(can_add_vertical(1, 1, 3))


class GreedyLayoutTests(unittest.TestCase):
    def test_places_crossing_words(self) -> None:
        result = build_greedy_layout(["LOW", "HELLO", "OWL"], 15, 15)
        self.assertTrue(result.success)
        self.assertEqual(result.dropped_words, [])
        self.assertEqual(
            result.placements,
            [
                WordPlacement("HELLO", (5, 7), H, 1),
                WordPlacement("LOW", (7, 7), V, 2),
                WordPlacement("OWL", (6, 9), H, 3),
            ],
        )

    def test_is_deterministic(self) -> None:
        words = ["CAT", "ART", "TEA", "TRACE", "CRATE"]
        first = build_greedy_layout(words, 12, 12)
        second = build_greedy_layout(words, 12, 12)
        self.assertEqual(first.to_payload(), second.to_payload())

    def test_skips_words_wider_than_grid(self) -> None:
        result = build_greedy_layout(["ABCDEFGHIJK", "CAT"], 5, 5)
        self.assertEqual(result.placed_words, ["CAT"])
        self.assertEqual(result.dropped_words, ["ABCDEFGHIJK"])

    def test_unplaceable_word_is_reported(self) -> None:
        result = build_greedy_layout(["CAT", "DOG"], 10, 10)
        self.assertEqual(result.placed_words, ["CAT"])
        self.assertEqual(result.dropped_words, ["DOG"])

    def test_empty_input(self) -> None:
        result = build_greedy_layout([], 10, 10)
        self.assertFalse(result.success)
        self.assertEqual(result.placements, [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
