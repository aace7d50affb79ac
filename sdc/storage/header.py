"""Encoding and decoding of the .sdc file header."""

from __future__ import annotations

from sdc.errors import (
    InvalidHeaderInformationError,
    InvalidHeaderSizeError,
    ShortReadError,
)
from sdc.storage.format import (
    HEADER_FIXED_SIZE,
    HEADER_STRUCT,
    ReadableStream,
    WritableStream,
    read_exactly,
    write_all,
)
from sdc.utils.schema import FileHeader


def decode_header(stream: ReadableStream) -> FileHeader:
    """Read the file header from the start of ``stream``.

    The header information bytes are returned as-is; use
    :meth:`FileHeader.header_information_as_str` to interpret them.

    Raises:
        ShortReadError: If the stream ends inside the 8 fixed header bytes.
        InvalidHeaderSizeError: If the declared header size is below 8.
        InvalidHeaderInformationError: If the header information is shorter
            than the declared header size implies.
    """
    raw = read_exactly(stream, HEADER_FIXED_SIZE)
    if len(raw) < HEADER_FIXED_SIZE:
        raise ShortReadError(HEADER_FIXED_SIZE, len(raw))
    header_size, major, minor = HEADER_STRUCT.unpack(raw)

    if header_size < HEADER_FIXED_SIZE:
        raise InvalidHeaderSizeError(header_size)

    info_len = header_size - HEADER_FIXED_SIZE
    info = read_exactly(stream, info_len)
    if len(info) != info_len:
        raise InvalidHeaderInformationError(info_len, len(info))

    return FileHeader(
        header_size=header_size,
        version_major=major,
        version_minor=minor,
        header_information=info,
    )


def pack_header(major: int, minor: int) -> bytes:
    """Return the 8-byte header for a file with no header information."""
    return HEADER_STRUCT.pack(HEADER_FIXED_SIZE, major, minor)


def encode_header(stream: WritableStream, major: int, minor: int) -> None:
    """Write an 8-byte header (no header information) to ``stream``."""
    write_all(stream, pack_header(major, minor))


def header_information_as_str(header: FileHeader) -> str:
    """Interpret the header information as UTF-8 text.

    Raises:
        HeaderTextError: If the bytes are not valid UTF-8.
    """
    return header.header_information_as_str()
