from __future__ import annotations

import argparse
import os
import struct
import sys
from typing import Optional

from pbptool.constants import SEGMENT_COUNT, segment_index
from pbptool.errors import PBPError
from pbptool.header import read_header


# Offset slot i lives at byte 8 + 4*i of the header
_OFFSET_BASE = 8


def _xor_at(path: str, offset: int, mask: int = 0xFF) -> int:
    """XOR one byte in place and return its new value."""
    size = os.path.getsize(path)
    if not 0 <= offset < size:
        raise ValueError(f"Offset must be within 0..{size - 1}")
    with open(path, "r+b") as f:
        f.seek(offset)
        new = f.read(1)[0] ^ (mask & 0xFF)
        f.seek(offset)
        f.write(bytes([new]))
    return new


def cmd_by_offset(args: argparse.Namespace) -> None:
    new = _xor_at(args.container, args.offset, mask=args.xor)
    print(f"Byte at offset {args.offset} is now 0x{new:02x}")


def cmd_truncate(args: argparse.Namespace) -> None:
    size = os.path.getsize(args.container)
    if args.length is not None:
        new_len = args.length
    elif args.into is not None:
        with open(args.container, "rb") as f:
            header = read_header(f)
        new_len = header.offsets[segment_index(args.into)] + args.keep
    else:
        new_len = size - args.drop
    if new_len < 0 or new_len > size:
        raise ValueError(f"Target length must be within 0..{size}")
    with open(args.container, "r+b") as f:
        f.truncate(new_len)
    print(f"Truncated to {new_len} byte(s) (was {size})")


def cmd_set_offset(args: argparse.Namespace) -> None:
    idx = segment_index(args.slot)
    if not 0 <= args.value <= 0xFFFFFFFF:
        raise ValueError("Offset must fit in 32 bits")
    with open(args.container, "r+b") as f:
        f.seek(_OFFSET_BASE + 4 * idx)
        f.write(struct.pack("<I", args.value))
    print(f"Set offset[{idx}] = {args.value}")


def _slot(value: str):
    return int(value) if value.isdigit() else value


def main(argv: Optional[list[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="pbptool.corrupt", description="Corrupt PBP containers for testing")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_off = sub.add_parser("by-offset", help="Flip one byte at an absolute file offset")
    p_off.add_argument("container", help="Path to .pbp container")
    p_off.add_argument("--offset", type=int, required=True, help="Absolute byte offset in container")
    p_off.add_argument("--xor", type=lambda x: int(x, 0), default=0xFF, help="XOR mask to apply (default 0xFF)")
    p_off.set_defaults(func=cmd_by_offset)

    p_trunc = sub.add_parser("truncate", help="Cut bytes off the end of the container")
    p_trunc.add_argument("container", help="Path to .pbp container")
    group = p_trunc.add_mutually_exclusive_group()
    group.add_argument("--length", type=int, help="Absolute target length")
    group.add_argument("--into", type=_slot, help="Cut inside this segment (index or name)")
    group.add_argument("--drop", type=int, default=1, help="Bytes to remove from the end (default 1)")
    p_trunc.add_argument("--keep", type=int, default=1, help="With --into: bytes of that segment to keep (default 1)")
    p_trunc.set_defaults(func=cmd_truncate)

    p_set = sub.add_parser("set-offset", help=f"Rewrite one of the {SEGMENT_COUNT} header offsets")
    p_set.add_argument("container", help="Path to .pbp container")
    p_set.add_argument("--slot", type=_slot, required=True, help="Segment index or name")
    p_set.add_argument("--value", type=int, required=True, help="New offset value")
    p_set.set_defaults(func=cmd_set_offset)

    args = ap.parse_args(argv)
    try:
        args.func(args)
    except (PBPError, OSError, ValueError, KeyError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
