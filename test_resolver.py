from __future__ import annotations

import random
import unittest

from pbptool.constants import HEADER_SIZE, SEGMENT_NAMES
from pbptool.errors import InvalidSegmentRange
from pbptool.resolver import SegmentSpan, corrected_range, resolve_segments


class ResolverTests(unittest.TestCase):
    def test_contiguous_segments(self):
        offsets = [40, 50, 60, 70, 80, 90, 100, 110]
        spans = resolve_segments(offsets, 125)
        self.assertEqual([s.length for s in spans], [10] * 7 + [15])
        self.assertEqual([s.name for s in spans], list(SEGMENT_NAMES))
        self.assertTrue(all(s.present for s in spans))
        self.assertEqual(spans[7].end, 125)

    def test_equal_neighbours_are_absent(self):
        spans = resolve_segments([40, 40, 40, 52, 52, 52, 52, 52], 60)
        self.assertEqual([s.present for s in spans], [False, False, True, False, False, False, False, True])
        self.assertEqual(spans[2].length, 12)
        self.assertEqual(spans[7].length, 8)

    def test_decreasing_offset_is_absent(self):
        spans = resolve_segments([100, 40, 60, 60, 60, 60, 60, 60], 60)
        self.assertFalse(spans[0].present)
        self.assertEqual(spans[0].length, 0)
        self.assertTrue(spans[1].present)
        self.assertFalse(spans[7].present)

    def test_presence_law_random(self):
        rng = random.Random(1234)
        for _ in range(200):
            offsets = [rng.randrange(0, 400) for _ in range(8)]
            file_length = rng.randrange(0, 500)
            spans = resolve_segments(offsets, file_length)
            for i, s in enumerate(spans):
                limit = offsets[i + 1] if i < 7 else file_length
                self.assertEqual(not s.present, limit <= offsets[i])
                self.assertEqual(s.length, max(0, limit - offsets[i]))

    def test_wrong_offset_count(self):
        with self.assertRaises(ValueError):
            resolve_segments([40] * 9, 40)


class CorrectedRangeTests(unittest.TestCase):
    def _span(self, start: int, length: int) -> SegmentSpan:
        return SegmentSpan(index=0, name="PARAM.SFO", start=start, length=length)

    def test_first_segment_starts_at_body_zero(self):
        self.assertEqual(corrected_range(self._span(HEADER_SIZE, 10), 10), (0, 10))
        self.assertEqual(corrected_range(self._span(HEADER_SIZE + 4, 6), 10), (4, 10))

    def test_start_inside_header(self):
        with self.assertRaises(InvalidSegmentRange):
            corrected_range(self._span(HEADER_SIZE - 1, 4), 100)

    def test_range_past_body(self):
        with self.assertRaises(InvalidSegmentRange):
            corrected_range(self._span(HEADER_SIZE + 5, 6), 10)


if __name__ == "__main__":
    unittest.main()
