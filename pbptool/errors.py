class PBPError(Exception):
    """Base class for pbptool-specific errors."""


# Header related
class HeaderReadError(PBPError):
    pass


class HeaderValidationError(PBPError):
    pass


class InvalidSignature(HeaderValidationError):
    pass


class InvalidVersion(HeaderValidationError):
    pass


# Bounds/consistency
class InvalidSegmentRange(PBPError):
    pass


class ContainerSizeError(PBPError):
    pass


# Filesystem
class DirectoryCreateFailed(PBPError):
    pass


class SourceReadError(PBPError):
    pass
