"""sdc: read and write Riegl .sdc discrete-return LiDAR files.

An .sdc file is a short header (size, version, free-form header text)
followed by fixed-layout point records. Newer minor versions append
optional fields (class id, rho, reflectance) to each record.

Quick start:
    from sdc import Point, Reader, TargetType, Writer

    # Write
    with Writer.from_path("scan.sdc") as writer:
        writer.write_point(Point(time=1.0, x=2.5, target_type=TargetType.Gaussian))

    # Read
    with Reader.from_path("scan.sdc") as reader:
        major, minor = reader.version
        for point in reader:
            print(point.time, point.x, point.y, point.z)

    # As a numpy structured array
    from sdc.points import read_points
    cloud = read_points("scan.sdc")
"""

__version__ = "0.1.0"

from sdc.errors import (
    HeaderError,
    HeaderTextError,
    InvalidHeaderInformationError,
    InvalidHeaderSizeError,
    InvalidMajorVersionError,
    InvalidTargetTypeError,
    MissingFieldError,
    SdcError,
    ShortReadError,
)
from sdc.storage.reader import Reader
from sdc.storage.writer import Writer
from sdc.utils.schema import FileHeader, Point, TargetType, Version

__all__ = [
    "Reader",
    "Writer",
    "Point",
    "TargetType",
    "FileHeader",
    "Version",
    "SdcError",
    "ShortReadError",
    "HeaderError",
    "HeaderTextError",
    "InvalidHeaderInformationError",
    "InvalidHeaderSizeError",
    "InvalidMajorVersionError",
    "InvalidTargetTypeError",
    "MissingFieldError",
    "__version__",
]
