import unittest

from crossword_layout.core.constants import Orientation
from crossword_layout.engine.grid import LetterGrid
from crossword_layout.engine.intersections import (
    aligned_start,
    alignments,
    find_candidates,
    first_candidate,
)

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


class IntersectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = LetterGrid(10, 10)
        self.placements = []
        self.grid.place("CAT", (4, 5), H, self.placements)

    def test_alignments_cover_every_shared_letter(self) -> None:
        self.assertEqual(list(alignments("ART", self.placements)), [((5, 5), 0), ((6, 5), 2)])

    def test_alignments_repeat_for_repeated_letters(self) -> None:
        self.assertEqual(list(alignments("TAT", self.placements)), [((5, 5), 1), ((6, 5), 0), ((6, 5), 2)])

    def test_aligned_start(self) -> None:
        self.assertEqual(aligned_start((6, 5), 2, H), (4, 5))
        self.assertEqual(aligned_start((6, 5), 2, V), (6, 3))

    def test_find_candidates(self) -> None:
        candidates = find_candidates("ART", self.grid, self.placements)
        self.assertEqual(candidates, [((5, 5), V), ((6, 3), V)])

    def test_force_horizontal_only(self) -> None:
        self.assertEqual(find_candidates("ART", self.grid, self.placements, force_horizontal_only=True), [])

    def test_no_shared_letters(self) -> None:
        self.assertEqual(find_candidates("DOG", self.grid, self.placements), [])

    def test_first_candidate(self) -> None:
        self.assertEqual(first_candidate("ART", self.grid, self.placements, V), (5, 5))
        self.assertIsNone(first_candidate("ART", self.grid, self.placements, H))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
