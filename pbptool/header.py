from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, Sequence, Tuple

from .constants import (
    DEFAULT_SIGNATURE,
    HEADER_SIZE,
    MAX_OFFSET,
    SEGMENT_COUNT,
    VERSION_HIGH,
    VERSION_LOW,
)
from .errors import ContainerSizeError, HeaderReadError


_HEADER_STRUCT = struct.Struct("<4s2H8I")
# Fields (little endian, no padding):
# signature[4], version[0] u16, version[1] u16, offset[0..7] u32

assert _HEADER_STRUCT.size == HEADER_SIZE


@dataclass
class Header:
    signature: bytes
    version: Tuple[int, int]
    offsets: Tuple[int, ...]

    @property
    def version_string(self) -> str:
        # Stored low field first; shown as high.low
        return f"{self.version[1]}.{self.version[0]}"


def default_header(offsets: Sequence[int]) -> Header:
    return Header(
        signature=DEFAULT_SIGNATURE,
        version=(VERSION_LOW, VERSION_HIGH),
        offsets=tuple(offsets),
    )


def parse_header(raw: bytes) -> Header:
    if len(raw) < HEADER_SIZE:
        raise HeaderReadError(f"Failed to read header: got {len(raw)} of {HEADER_SIZE} bytes")
    (signature, v0, v1, *offsets) = _HEADER_STRUCT.unpack_from(raw, 0)
    return Header(signature=signature, version=(v0, v1), offsets=tuple(offsets))


def pack_header(header: Header) -> bytes:
    if len(header.signature) != 4:
        raise ValueError("Signature must be 4 bytes")
    if len(header.offsets) != SEGMENT_COUNT:
        raise ValueError(f"Header needs exactly {SEGMENT_COUNT} offsets, got {len(header.offsets)}")
    for off in header.offsets:
        if not 0 <= off <= MAX_OFFSET:
            raise ContainerSizeError(f"Offset {off} does not fit in 32 bits")
    return _HEADER_STRUCT.pack(header.signature, header.version[0], header.version[1], *header.offsets)


def read_header(f: BinaryIO) -> Header:
    f.seek(0)
    return parse_header(f.read(HEADER_SIZE))
