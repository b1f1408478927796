from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .constants import HEADER_SIZE, SEGMENT_COUNT, SEGMENT_NAMES
from .errors import InvalidSegmentRange


@dataclass(frozen=True)
class SegmentSpan:
    index: int
    name: str
    start: int
    length: int

    @property
    def present(self) -> bool:
        return self.length > 0

    @property
    def end(self) -> int:
        return self.start + self.length


def resolve_segments(offsets: Sequence[int], file_length: int) -> List[SegmentSpan]:
    """Derive start/length for every slot from the offset table.

    A slot's length is the distance to the next offset (or to the end of the
    file for the last slot). Anything that does not move forward, including
    equal neighbours, yields length 0 and the slot counts as absent.
    """
    if len(offsets) != SEGMENT_COUNT:
        raise ValueError(f"Expected {SEGMENT_COUNT} offsets, got {len(offsets)}")
    spans: List[SegmentSpan] = []
    for i in range(SEGMENT_COUNT):
        start = offsets[i]
        limit = offsets[i + 1] if i + 1 < SEGMENT_COUNT else file_length
        length = limit - start if limit > start else 0
        spans.append(SegmentSpan(index=i, name=SEGMENT_NAMES[i], start=start, length=length))
    return spans


def corrected_range(span: SegmentSpan, body_length: int) -> Tuple[int, int]:
    """Map a span onto the body buffer (everything after the header).

    Returns (lo, hi) slice bounds. Raises InvalidSegmentRange when the span
    starts inside the header or runs past the end of the body.
    """
    lo = span.start - HEADER_SIZE
    hi = lo + span.length
    if lo < 0 or hi > body_length:
        raise InvalidSegmentRange(f"invalid offset/size (offset={span.start}, size={span.length})")
    return lo, hi
