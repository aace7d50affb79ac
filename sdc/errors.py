"""Exceptions raised while reading and writing .sdc files.

Stream-level I/O failures are not wrapped: an ``OSError`` from the underlying
file or buffer reaches the caller unchanged.
"""

from __future__ import annotations


class SdcError(Exception):
    """Base exception for all .sdc format errors."""


class ShortReadError(SdcError):
    """Raised when the stream ends in the middle of a fixed-size field."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Unexpected end of stream: expected {expected} bytes, got {received}"
        )


class HeaderError(SdcError):
    """Raised when the file header cannot be decoded."""


class InvalidHeaderSizeError(HeaderError):
    """Raised when the declared header size is smaller than the fixed header."""

    def __init__(self, header_size: int) -> None:
        self.header_size = header_size
        super().__init__(
            f"Invalid header size {header_size}: must be at least 8 bytes"
        )


class InvalidHeaderInformationError(HeaderError):
    """Raised when the header information is shorter than declared."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Header information truncated: expected {expected} bytes, got {received}"
        )


class InvalidMajorVersionError(HeaderError):
    """Raised for any major version other than the supported 5.x family."""

    def __init__(self, major: int) -> None:
        self.major = major
        super().__init__(f"Unsupported major version: {major}")


class HeaderTextError(SdcError):
    """Raised when the header information is not valid UTF-8 text."""


class InvalidTargetTypeError(SdcError, ValueError):
    """Raised for a target type code outside the known set."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Invalid target type: {code}")


class MissingFieldError(SdcError, ValueError):
    """Raised when a point lacks an optional field its file version requires."""

    def __init__(self, field: str, major: int, minor: int) -> None:
        self.field = field
        super().__init__(
            f"Point has no '{field}', which version {major}.{minor} requires"
        )
