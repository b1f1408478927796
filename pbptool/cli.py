from __future__ import annotations

import argparse
import json as _json
import os
import sys
from typing import List

from pbptool import __version__
from pbptool.constants import NULL_SOURCE, SEGMENT_NAMES
from pbptool.errors import PBPError
from pbptool.reader import ContainerInfo, inspect_container, split_container
from pbptool.resolver import resolve_segments
from pbptool.writer import assemble_container


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)


def _format_signature(sig: bytes) -> str:
    return "".join(chr(b) if 0x20 <= b < 0x7F else f"\\x{b:02x}" for b in sig)


def _print_info(info: ContainerInfo) -> None:
    print("PBP Header:")
    print(f"\tSignature:\t{_format_signature(info.header.signature)}")
    print(f"\tVersion:\t{info.header.version_string}")
    print(f"\tFile size:\t{info.file_length}")
    print("Offsets:")
    for s in info.segments:
        if s.present:
            print(f"\t{s.name}:\t{s.start}\t({s.length} bytes)")
        else:
            print(f"\t{s.name}:\tNULL")


def cmd_analyze(container: str, *, as_json: bool = False) -> bool:
    """Print header fields and per-segment presence.

    Args:
        container: Path to a .pbp file.
        as_json: Emit a JSON object instead of the text report.
    """
    info = inspect_container(container)
    if as_json:
        print(_json.dumps(info.to_dict()))
    else:
        _print_info(info)
    return True


def cmd_unpack(container: str, outdir: str, *, quiet: bool = False) -> bool:
    """Extract every present segment into outdir.

    Segments with a bad range or a failed write are reported and skipped.
    Returns False when anything was skipped; main only turns that into a
    non-zero exit status under --strict.
    """
    report = split_container(container, outdir)
    if not quiet:
        for name, _path, size in report.written:
            print(f"  extracting: {name} ({size} bytes)")
    for name, reason in report.skipped:
        print(f"Warning: Skipping {name}: {reason}", file=sys.stderr)
    if not quiet:
        print(f"Extracted {len(report.written)} segment(s) to {outdir}")
    return report.ok


def cmd_pack(output: str, inputs: List[str], *, quiet: bool = False) -> bool:
    """Build a container from eight sources ("NULL" marks an empty slot)."""
    header = assemble_container(output, inputs)
    if not quiet:
        # Empty source files resolve as absent, so count from the written offsets
        spans = resolve_segments(header.offsets, os.path.getsize(output))
        stored = sum(1 for s in spans if s.present)
        print(f"Packed {stored} segment(s) into {output}")
        print("Offsets: " + " ".join(str(o) for o in header.offsets))
    return True


def build_parser() -> argparse.ArgumentParser:
    ap = _Parser(
        prog="pbptool",
        description="PBP container tool",
        epilog=f"Use {NULL_SOURCE} in place of a pack input to leave that slot empty.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_pack = sub.add_parser("pack", help="Pack eight segments into a container")
    ap_pack.add_argument("output", help="Output .pbp path")
    ap_pack.add_argument(
        "inputs",
        nargs=len(SEGMENT_NAMES),
        metavar="source",
        help=f"Eight segment sources in slot order: {', '.join(SEGMENT_NAMES)} ({NULL_SOURCE} for none)",
    )
    ap_pack.add_argument("--quiet", help="do not print the summary", action="store_true")

    ap_unpack = sub.add_parser("unpack", help="Unpack segments into a directory")
    ap_unpack.add_argument("input", help="Input .pbp path")
    ap_unpack.add_argument("output_dir", help="Output directory (created if missing)")
    ap_unpack.add_argument("--quiet", help="limit outputs to warnings only", action="store_true")
    ap_unpack.add_argument("--strict", action="store_true", help="Exit with status 1 if any segment was skipped")

    ap_analyze = sub.add_parser("analyze", help="Show header fields and segment offsets")
    ap_analyze.add_argument("input", help="Input .pbp path")
    ap_analyze.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    sub.add_parser("help", help="Show this message")
    return ap


def main(argv: List[str] | None = None):
    ap = build_parser()
    args = ap.parse_args(argv)
    try:
        success = True
        if args.cmd == "pack":
            success = cmd_pack(args.output, args.inputs, quiet=args.quiet)
        elif args.cmd == "unpack":
            ok = cmd_unpack(args.input, args.output_dir, quiet=args.quiet)
            success = ok or not args.strict
        elif args.cmd == "analyze":
            success = cmd_analyze(args.input, as_json=args.json)
        elif args.cmd == "help":
            ap.print_help()
        else:
            raise RuntimeError("Unknown command")
    except (PBPError, OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if not success:
        sys.exit(1)


if __name__ == "__main__":
    main()
