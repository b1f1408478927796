# Magic and version
PBP_MAGIC = b"PBP"                   # signature bytes 1..3
DEFAULT_SIGNATURE = b"\x00" + PBP_MAGIC

VERSION_LOW = 0                      # version[0]
VERSION_HIGH = 1                     # version[1]

HEADER_SIZE = 40                     # 4s signature, 2 x u16 version, 8 x u32 offsets
SEGMENT_COUNT = 8
MAX_OFFSET = 0xFFFFFFFF


# Canonical segment names, in slot order
SEGMENT_NAMES = (
    "PARAM.SFO",
    "ICON0.PNG",
    "ICON1.PMF",
    "PIC0.PNG",
    "PIC1.PNG",
    "SND0.AT3",
    "DATA.PSP",
    "DATA.PSAR",
)

# Source argument that marks an empty slot when packing
NULL_SOURCE = "NULL"


def segment_index(slot) -> int:
    """Map a slot given as index or canonical name to its index."""
    if isinstance(slot, int):
        if not 0 <= slot < SEGMENT_COUNT:
            raise IndexError(f"segment index out of range (0..{SEGMENT_COUNT - 1}): {slot}")
        return slot
    try:
        return SEGMENT_NAMES.index(str(slot).upper())
    except ValueError:
        raise KeyError(f"unknown segment name: {slot}") from None
