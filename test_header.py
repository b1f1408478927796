from __future__ import annotations

import io
import struct
import unittest

from pbptool.constants import HEADER_SIZE, SEGMENT_COUNT
from pbptool.errors import ContainerSizeError, HeaderReadError, InvalidSignature, InvalidVersion
from pbptool.header import Header, default_header, pack_header, parse_header, read_header
from pbptool.validator import is_valid_header, validate_header


def _header(sig: bytes = b"\x00PBP", version=(0, 1), offsets=None) -> Header:
    return Header(signature=sig, version=version, offsets=tuple(offsets or [HEADER_SIZE] * SEGMENT_COUNT))


class HeaderLayoutTests(unittest.TestCase):
    def test_default_header_bytes(self):
        raw = pack_header(default_header([40, 50, 50, 60, 60, 60, 70, 0x01020304]))
        self.assertEqual(len(raw), HEADER_SIZE)
        self.assertEqual(raw[:4], b"\x00PBP")
        # version[0] then version[1], little endian
        self.assertEqual(raw[4:8], b"\x00\x00\x01\x00")
        self.assertEqual(raw[8:12], b"\x28\x00\x00\x00")
        self.assertEqual(raw[36:40], b"\x04\x03\x02\x01")

    def test_parse_matches_manual_layout(self):
        offsets = [40, 100, 100, 200, 300, 300, 400, 500]
        raw = b"\x7fPBP" + struct.pack("<HH", 3, 1) + struct.pack("<8I", *offsets)
        h = parse_header(raw + b"trailing payload")
        self.assertEqual(h.signature, b"\x7fPBP")
        self.assertEqual(h.version, (3, 1))
        self.assertEqual(h.offsets, tuple(offsets))
        self.assertEqual(h.version_string, "1.3")
        self.assertEqual(pack_header(h), raw)

    def test_short_header_rejected(self):
        with self.assertRaises(HeaderReadError):
            parse_header(b"\x00PBP" + b"\x00" * 10)
        with self.assertRaises(HeaderReadError):
            read_header(io.BytesIO(b""))

    def test_read_header_rewinds(self):
        raw = pack_header(default_header([HEADER_SIZE] * SEGMENT_COUNT))
        buf = io.BytesIO(raw + b"xyz")
        buf.seek(41)
        self.assertEqual(read_header(buf).offsets, (HEADER_SIZE,) * SEGMENT_COUNT)

    def test_offset_overflow(self):
        with self.assertRaises(ContainerSizeError):
            pack_header(_header(offsets=[40] * 7 + [1 << 32]))

    def test_wrong_offset_count(self):
        with self.assertRaises(ValueError):
            pack_header(_header(offsets=[40] * 7))


class ValidatorTests(unittest.TestCase):
    def test_reserved_signature_byte_ignored(self):
        for x in (0x00, 0x01, 0x50, 0x7F, 0xFF):
            validate_header(_header(sig=bytes([x]) + b"PBP"))

    def test_bad_signature(self):
        for sig in (b"\x00PBX", b"\x00pbp", b"PBP\x00", b"\x00\x00\x00\x00"):
            with self.assertRaises(InvalidSignature):
                validate_header(_header(sig=sig))

    def test_version_rule(self):
        accepted = [(0, 1), (0, 5), (7, 1), (0, 0), (0, 9)]
        rejected = [(5, 0), (5, 2), (1, 0xFFFF), (2, 0)]
        for v in accepted:
            self.assertTrue(is_valid_header(_header(version=v)), v)
        for v in rejected:
            with self.assertRaises(InvalidVersion):
                validate_header(_header(version=v))
            self.assertFalse(is_valid_header(_header(version=v)))

    def test_signature_checked_before_version(self):
        with self.assertRaises(InvalidSignature):
            validate_header(_header(sig=b"\x00ELF", version=(5, 2)))


if __name__ == "__main__":
    unittest.main()
