"""Encoding and decoding of single .sdc point records.

Record layout (little-endian):

    time (f64) range theta x y z (f32)
    amplitude width (u16) target_type target num_target (u8)
    rg_index (u16) channel descriptor byte (u8)   (38 bytes, always present)
    class_id (u8)  if version >= 5.2
    rho (f32)  if version >= 5.3
    reflectance (i16)  if version >= 5.4
"""

from __future__ import annotations

import struct

from sdc.errors import MissingFieldError, ShortReadError
from sdc.storage.format import (
    CLASS_ID_STRUCT,
    RECORD_BODY_STRUCT,
    RECORD_FIXED_SIZE,
    REFLECTANCE_STRUCT,
    RHO_STRUCT,
    TIME_STRUCT,
    ReadableStream,
    read_exactly,
)
from sdc.utils.schema import Point, TargetType, Version, split_channel_desc_byte


def _optional_fields(version: Version) -> list[tuple[str, struct.Struct]]:
    """Optional trailing fields carried by ``version``, in on-disk order."""
    fields = []
    if version.has_class_id:
        fields.append(("class_id", CLASS_ID_STRUCT))
    if version.has_rho:
        fields.append(("rho", RHO_STRUCT))
    if version.has_reflectance:
        fields.append(("reflectance", REFLECTANCE_STRUCT))
    return fields


def record_size(major: int, minor: int) -> int:
    """Number of bytes in one point record for the given file version."""
    version = Version(major, minor)
    return RECORD_FIXED_SIZE + sum(s.size for _, s in _optional_fields(version))


def encode_point(point: Point, major: int, minor: int) -> bytes:
    """Encode ``point`` as one record of an ``major.minor`` file.

    Optional fields the version does not carry are dropped.

    Raises:
        MissingFieldError: If the version requires an optional field that is
            ``None`` on the point.
    """
    parts = [
        TIME_STRUCT.pack(point.time),
        RECORD_BODY_STRUCT.pack(
            point.range,
            point.theta,
            point.x,
            point.y,
            point.z,
            point.amplitude,
            point.width,
            point.target_type.as_u8(),
            point.target,
            point.num_target,
            point.rg_index,
            point.channel_desc_byte(),
        ),
    ]
    for name, fmt in _optional_fields(Version(major, minor)):
        value = getattr(point, name)
        if value is None:
            raise MissingFieldError(name, major, minor)
        parts.append(fmt.pack(value))
    return b"".join(parts)


def decode_point(stream: ReadableStream, major: int, minor: int) -> Point | None:
    """Read the next point record from ``stream``.

    Returns:
        The decoded point, or None if the stream was already at its end.

    Raises:
        ShortReadError: If the stream ends partway through a record.
        InvalidTargetTypeError: If the target type byte is unknown.
    """
    version = Version(major, minor)
    size = record_size(major, minor)

    raw_time = read_exactly(stream, TIME_STRUCT.size)
    if not raw_time:
        return None
    if len(raw_time) < TIME_STRUCT.size:
        raise ShortReadError(size, len(raw_time))
    (time,) = TIME_STRUCT.unpack(raw_time)

    rest_size = size - TIME_STRUCT.size
    raw = read_exactly(stream, rest_size)
    if len(raw) < rest_size:
        raise ShortReadError(size, TIME_STRUCT.size + len(raw))

    (
        range_,
        theta,
        x,
        y,
        z,
        amplitude,
        width,
        target_type,
        target,
        num_target,
        rg_index,
        channel_desc,
    ) = RECORD_BODY_STRUCT.unpack_from(raw)
    facet_number, high_channel = split_channel_desc_byte(channel_desc)

    optional = {}
    offset = RECORD_BODY_STRUCT.size
    for name, fmt in _optional_fields(version):
        (optional[name],) = fmt.unpack_from(raw, offset)
        offset += fmt.size

    return Point(
        time=time,
        range=range_,
        theta=theta,
        x=x,
        y=y,
        z=z,
        amplitude=amplitude,
        width=width,
        target_type=TargetType.from_u8(target_type),
        target=target,
        num_target=num_target,
        rg_index=rg_index,
        facet_number=facet_number,
        high_channel=high_channel,
        **optional,
    )
