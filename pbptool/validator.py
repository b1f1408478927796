from __future__ import annotations

from .constants import PBP_MAGIC
from .errors import HeaderValidationError, InvalidSignature, InvalidVersion
from .header import Header


def validate_header(header: Header) -> None:
    """Check signature and version, raising on the first failure.

    Byte 0 of the signature is reserved and never checked. The version test
    only rejects a header whose high field is not 1 *and* whose low field is
    not 0. Tuples are (version[0], version[1]) as stored, so (0, 5) and (7, 1)
    pass while (5, 0) and (5, 2) do not. Containers in the wild rely on this
    permissive rule; keep it as is.
    """
    if header.signature[1:4] != PBP_MAGIC:
        raise InvalidSignature(f"Invalid signature: {header.signature!r}")
    if header.version[1] != 1 and header.version[0] != 0:
        raise InvalidVersion(f"Invalid version: {header.version[0]}.{header.version[1]}")


def is_valid_header(header: Header) -> bool:
    try:
        validate_header(header)
    except HeaderValidationError:
        return False
    return True
