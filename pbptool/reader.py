from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List, Optional, Tuple

from .constants import HEADER_SIZE
from .errors import DirectoryCreateFailed, InvalidSegmentRange, PBPError
from .header import Header, read_header
from .resolver import SegmentSpan, corrected_range, resolve_segments
from .validator import validate_header


@dataclass
class ContainerInfo:
    path: str
    header: Header
    file_length: int
    segments: List[SegmentSpan]

    def present(self) -> List[SegmentSpan]:
        return [s for s in self.segments if s.present]

    def to_dict(self) -> Dict:
        return {
            "path": self.path,
            "signature": self.header.signature.hex(),
            "version": self.header.version_string,
            "file_length": self.file_length,
            "segments": [
                {
                    "index": s.index,
                    "name": s.name,
                    "offset": s.start,
                    "size": s.length,
                    "present": s.present,
                }
                for s in self.segments
            ],
        }


@dataclass
class SplitReport:
    output_dir: str
    written: List[Tuple[str, str, int]] = field(default_factory=list)  # (name, path, size)
    skipped: List[Tuple[str, str]] = field(default_factory=list)  # (name, reason)

    @property
    def ok(self) -> bool:
        return not self.skipped


class PBPReader:
    """Open a container, validate its header and resolve segment spans.

    Header problems (short read, bad signature or version) raise from open()
    and leave no file handle behind.
    """

    def __init__(self, path: str):
        self.path = path
        self.f: Optional[BinaryIO] = None
        self.header: Optional[Header] = None
        self.file_length: int = 0
        self.segments: List[SegmentSpan] = []

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self):
        if self.f is not None:
            return
        self.f = open(self.path, "rb")
        try:
            self.header = read_header(self.f)
            validate_header(self.header)
            self.file_length = self.f.seek(0, os.SEEK_END)
            self.segments = resolve_segments(self.header.offsets, self.file_length)
        except (PBPError, OSError) as exc:
            self.close()
            raise exc

    def close(self):
        if self.f is not None:
            self.f.close()
            self.f = None

    def info(self) -> ContainerInfo:
        if self.header is None:
            raise RuntimeError("Container not open")
        return ContainerInfo(
            path=self.path,
            header=self.header,
            file_length=self.file_length,
            segments=list(self.segments),
        )

    def read_body(self) -> bytes:
        """Return every byte after the header."""
        if self.f is None:
            raise RuntimeError("Container not open")
        self.f.seek(HEADER_SIZE)
        return self.f.read()

    def read_segment(self, span: SegmentSpan, body: Optional[bytes] = None) -> bytes:
        if body is None:
            body = self.read_body()
        lo, hi = corrected_range(span, len(body))
        return body[lo:hi]

    def extract_all(self, outdir: str) -> SplitReport:
        """Write each present segment to outdir/<canonical name>.

        Per-segment failures are collected in the report; the remaining
        segments are still processed.
        """
        try:
            os.makedirs(outdir, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateFailed(f"Failed to create directory '{outdir}': {exc}") from exc

        report = SplitReport(output_dir=outdir)
        body = self.read_body()
        for span in self.segments:
            if not span.present:
                continue
            try:
                data = self.read_segment(span, body)
            except InvalidSegmentRange as exc:
                report.skipped.append((span.name, str(exc)))
                continue
            out_path = os.path.join(outdir, span.name)
            try:
                with open(out_path, "wb") as wf:
                    wf.write(data)
            except OSError as exc:
                report.skipped.append((span.name, f"failed to write '{out_path}': {exc}"))
                continue
            report.written.append((span.name, out_path, len(data)))
        return report


def inspect_container(path: str) -> ContainerInfo:
    with PBPReader(path) as r:
        return r.info()


def split_container(path: str, outdir: str) -> SplitReport:
    with PBPReader(path) as r:
        return r.extract_all(outdir)
