"""Streaming reader for .sdc files.

Points are decoded one at a time, so files larger than memory can be read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO, Iterator

from sdc.errors import InvalidMajorVersionError, SdcError
from sdc.storage.codec import decode_point
from sdc.storage.format import SUPPORTED_MAJOR_VERSION, ReadableStream
from sdc.storage.header import decode_header
from sdc.utils.schema import FileHeader, Point, Version


class Reader:
    """Sequential reader for .sdc point records.

    The header is decoded on construction. Points are then read with
    :meth:`next_point` or by iterating over the reader. Once the end of the
    stream has been seen the reader stays exhausted.

    Args:
        stream: Binary stream positioned at the start of an .sdc file.
    """

    def __init__(self, stream: ReadableStream) -> None:
        header = decode_header(stream)
        if header.version_major != SUPPORTED_MAJOR_VERSION:
            raise InvalidMajorVersionError(header.version_major)

        self._stream = stream
        self._owned: BinaryIO | None = None
        self._header = header
        self._exhausted = False
        self._error: Exception | None = None
        self._points_read = 0

    @classmethod
    def from_path(cls, path: str | Path) -> Reader:
        """Open an .sdc file for reading.

        The file is closed again if the header cannot be read.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"SDC file not found: {path}")

        fh = open(path, "rb")
        try:
            reader = cls(fh)
        except BaseException:
            fh.close()
            raise
        reader._owned = fh
        return reader

    def close(self) -> None:
        """Close the file if this reader opened it."""
        if self._owned is not None:
            self._owned.close()
            self._owned = None

    def __enter__(self) -> Reader:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def header(self) -> FileHeader:
        return self._header

    @property
    def version(self) -> Version:
        """The file version as ``(major, minor)``."""
        return self._header.version

    @property
    def header_information(self) -> bytes:
        return self._header.header_information

    def header_information_as_str(self) -> str:
        """Header information as text.

        Raises:
            HeaderTextError: If it is not valid UTF-8.
        """
        return self._header.header_information_as_str()

    @property
    def exhausted(self) -> bool:
        """True once the end of the stream has been reached."""
        return self._exhausted

    @property
    def failed(self) -> bool:
        """True once a record has failed to decode."""
        return self._error is not None

    @property
    def points_read(self) -> int:
        return self._points_read

    def next_point(self) -> Point | None:
        """Read the next point.

        After a decoding error the stream position is undefined, so every
        later call raises the same error again.

        Returns:
            The next point, or None at the end of the stream.

        Raises:
            ShortReadError: If the stream ends partway through a record.
            InvalidTargetTypeError: If a record has an unknown target type.
        """
        if self._error is not None:
            raise self._error
        if self._exhausted:
            return None
        major, minor = self.version
        try:
            point = decode_point(self._stream, major, minor)
        except (SdcError, OSError) as e:
            self._error = e
            raise
        if point is None:
            self._exhausted = True
            return None
        self._points_read += 1
        return point

    def points(self) -> Iterator[Point]:
        """Yield the remaining points.

        Decoding errors are raised from the iterator and end iteration.
        """
        while True:
            point = self.next_point()
            if point is None:
                return
            yield point

    def __iter__(self) -> Iterator[Point]:
        return self.points()

    def read_all(self) -> list[Point]:
        """Read every remaining point into a list."""
        return list(self.points())

    def __repr__(self) -> str:
        return f"Reader(version={self.version}, points_read={self._points_read})"
