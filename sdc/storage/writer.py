"""Streaming writer for .sdc files.

The header is written as soon as the writer is created; each point is
encoded and appended as it is written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO, Iterable

from sdc.errors import InvalidMajorVersionError
from sdc.storage.codec import encode_point
from sdc.storage.format import (
    DEFAULT_VERSION,
    SUPPORTED_MAJOR_VERSION,
    WritableStream,
    write_all,
)
from sdc.storage.header import encode_header
from sdc.utils.schema import Point, Version


class Writer:
    """Writes .sdc point records to a binary stream.

    Args:
        stream: Binary stream to write to. The header is written immediately.
        version: File version to declare. Decides which optional point
            fields are written.
    """

    def __init__(
        self,
        stream: WritableStream,
        version: tuple[int, int] = DEFAULT_VERSION,
    ) -> None:
        version = Version(*version)
        if version.major != SUPPORTED_MAJOR_VERSION:
            raise InvalidMajorVersionError(version.major)

        self._stream = stream
        self._owned: BinaryIO | None = None
        self._version = version
        self._point_count = 0
        encode_header(stream, version.major, version.minor)

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        version: tuple[int, int] = DEFAULT_VERSION,
    ) -> Writer:
        """Create (or truncate) an .sdc file and open it for writing."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = open(path, "wb")
        try:
            writer = cls(fh, version)
        except BaseException:
            fh.close()
            raise
        writer._owned = fh
        return writer

    @property
    def version(self) -> Version:
        return self._version

    @property
    def point_count(self) -> int:
        """Number of points written so far."""
        return self._point_count

    def write_point(self, point: Point) -> None:
        """Append one point record.

        Raises:
            MissingFieldError: If the file version requires an optional
                field the point does not have.
        """
        if self._stream is None:
            raise RuntimeError("Writer is closed.")
        write_all(self._stream, encode_point(point, *self._version))
        self._point_count += 1

    def write_points(self, points: Iterable[Point]) -> int:
        """Append several points in order. Returns how many were written."""
        n = 0
        for point in points:
            self.write_point(point)
            n += 1
        return n

    def flush(self) -> None:
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        """Flush, and close the file if this writer opened it."""
        if self._stream is None:
            return
        self.flush()
        if self._owned is not None:
            self._owned.close()
            self._owned = None
        self._stream = None

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
