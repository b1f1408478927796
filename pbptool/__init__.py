"""
pbptool: inspect, unpack and pack PBP containers.

A PBP container is a 40-byte header (signature, version pair and eight u32
segment offsets) followed by up to eight segments stored back to back:

- PARAM.SFO, ICON0.PNG, ICON1.PMF, PIC0.PNG, PIC1.PNG, SND0.AT3,
  DATA.PSP, DATA.PSAR

A segment is absent when the next offset (or the file end, for the last
slot) does not exceed its own offset. See pbptool.resolver for the exact
rules and pbptool.cli for the command line front end.
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "header",
    "validator",
    "resolver",
    "reader",
    "writer",
]

# Programmatic API: pbptool.reader (inspect_container/split_container) and
# pbptool.writer (assemble_container/PBPWriter).
