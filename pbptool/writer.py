from __future__ import annotations

from typing import List, Optional, Sequence, Union

from .constants import HEADER_SIZE, MAX_OFFSET, NULL_SOURCE, SEGMENT_COUNT, segment_index
from .errors import ContainerSizeError, SourceReadError
from .header import Header, default_header, pack_header


Slot = Union[int, str]


def _is_null_source(src: Optional[str]) -> bool:
    return src is None or src == NULL_SOURCE


def _read_source(path: str) -> bytes:
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise SourceReadError(f"Failed to read input file '{path}': {exc}") from exc


def compute_offsets(sizes: Sequence[int]) -> List[int]:
    """Offset of each slot: header size plus the bytes of every earlier slot.

    Empty slots take the running cursor, so they share the offset of the
    next stored segment and resolve as absent.
    """
    offsets: List[int] = []
    cursor = HEADER_SIZE
    for size in sizes:
        offsets.append(cursor)
        cursor += size
    if offsets and offsets[-1] > MAX_OFFSET:
        raise ContainerSizeError(f"Container too large: segment offset {offsets[-1]} exceeds 32 bits")
    return offsets


class PBPWriter:
    """Collect up to eight segments in memory, then write the container.

    Nothing touches the output path until finalize(). The write itself is
    not atomic: an I/O error midway leaves a partial file behind.
    """

    def __init__(self, path: str):
        self.path = path
        self.contents: List[Optional[bytes]] = [None] * SEGMENT_COUNT

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.contents = [None] * SEGMENT_COUNT

    def set_segment(self, slot: Slot, data: Optional[bytes]) -> None:
        self.contents[segment_index(slot)] = bytes(data) if data is not None else None

    def add_file(self, slot: Slot, src_path: Optional[str]) -> None:
        if _is_null_source(src_path):
            self.set_segment(slot, None)
            return
        self.set_segment(slot, _read_source(src_path))

    def build_header(self) -> Header:
        sizes = [len(c) if c is not None else 0 for c in self.contents]
        return default_header(compute_offsets(sizes))

    def finalize(self) -> Header:
        header = self.build_header()
        raw_header = pack_header(header)
        with open(self.path, "wb") as out:
            out.write(raw_header)
            for data in self.contents:
                if data:
                    out.write(data)
        return header


def assemble_container(output: str, sources: Sequence[Optional[str]]) -> Header:
    """Build a container at output from eight source paths.

    A source of None or "NULL" leaves that slot empty. Every source is read
    before output is opened, so an unreadable input aborts without creating
    the destination.
    """
    if len(sources) != SEGMENT_COUNT:
        raise ValueError(f"Expected {SEGMENT_COUNT} sources, got {len(sources)}")
    with PBPWriter(output) as w:
        for i, src in enumerate(sources):
            w.add_file(i, src)
        return w.finalize()
