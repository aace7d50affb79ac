"""Riegl .sdc file format constants and stream helpers.

An .sdc file is a small header followed by point records until end of file:

    header_size       : u32, total header bytes including these 8
    version_major     : u16
    version_minor     : u16
    header_information: header_size - 8 bytes, usually text
    record 0 .. N     : see sdc.storage.codec

All integers and floats are little-endian.
"""

from __future__ import annotations

import struct
from typing import Protocol

from sdc.utils.schema import Version

# File extension
FILE_EXTENSION = ".sdc"

# Fixed part of the header: header_size, version_major, version_minor
HEADER_STRUCT = struct.Struct("<IHH")
HEADER_FIXED_SIZE = HEADER_STRUCT.size  # 8

# Only the 5.x family is supported
SUPPORTED_MAJOR_VERSION = 5

# Version written by new files unless another is requested
DEFAULT_VERSION = Version(SUPPORTED_MAJOR_VERSION, 0)

# time, range, theta, x, y, z, amplitude, width, target_type, target,
# num_target, rg_index, channel descriptor byte
TIME_STRUCT = struct.Struct("<d")
RECORD_BODY_STRUCT = struct.Struct("<fffffHHBBBHB")
RECORD_FIXED_SIZE = TIME_STRUCT.size + RECORD_BODY_STRUCT.size  # 38

# Optional trailing fields, in on-disk order
CLASS_ID_STRUCT = struct.Struct("<B")
RHO_STRUCT = struct.Struct("<f")
REFLECTANCE_STRUCT = struct.Struct("<h")


class ReadableStream(Protocol):
    def read(self, size: int = ..., /) -> bytes: ...


class WritableStream(Protocol):
    def write(self, data: bytes, /) -> int | None: ...


def read_exactly(stream: ReadableStream, size: int) -> bytes:
    """Read up to ``size`` bytes, retrying on partial reads.

    Returns fewer than ``size`` bytes only when the stream is exhausted.
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def write_all(stream: WritableStream, data: bytes) -> None:
    """Write every byte of ``data``, retrying on partial writes.

    Raises:
        BlockingIOError: If a non-blocking stream accepts no bytes.
    """
    view = memoryview(data)
    while view:
        written = stream.write(view)
        # Raw non-blocking streams return None (or 0) when nothing was written
        if not written:
            raise BlockingIOError(
                f"Stream accepted no data, {len(view)} bytes left unwritten"
            )
        view = view[written:]
