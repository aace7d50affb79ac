"""Pydantic models for .sdc headers and point records."""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sdc.errors import HeaderTextError, InvalidTargetTypeError

# Channel descriptor byte layout
FACET_MASK = 0b00000011
HIGH_CHANNEL_BIT = 0b01000000

# First minor version (within major 5) that carries each optional field
CLASS_ID_MINOR = 2
RHO_MINOR = 3
REFLECTANCE_MINOR = 4

U8_MAX = 0xFF
U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF
I16_MIN = -0x8000
I16_MAX = 0x7FFF


class Version(NamedTuple):
    """An .sdc file version, e.g. ``Version(5, 2)`` for 5.2."""

    major: int
    minor: int

    def _at_least(self, minor: int) -> bool:
        return self.major >= 5 and self.minor >= minor

    @property
    def has_class_id(self) -> bool:
        return self._at_least(CLASS_ID_MINOR)

    @property
    def has_rho(self) -> bool:
        return self._at_least(RHO_MINOR)

    @property
    def has_reflectance(self) -> bool:
        return self._at_least(REFLECTANCE_MINOR)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


class TargetType(IntEnum):
    """How the range to a target was estimated from the echo waveform."""

    CenterOfGravity = 0
    Parabola = 1
    Gaussian = 2
    Peak = 3

    def as_u8(self) -> int:
        return int(self)

    @classmethod
    def from_u8(cls, code: int) -> TargetType:
        """Decode a target type byte.

        Raises:
            InvalidTargetTypeError: If ``code`` is not a known target type.
        """
        try:
            return cls(code)
        except ValueError:
            raise InvalidTargetTypeError(code) from None


class FileHeader(BaseModel):
    """Decoded .sdc file header. Immutable once read."""

    model_config = ConfigDict(frozen=True)

    header_size: int = Field(default=8, ge=8, le=U32_MAX)
    version_major: int = Field(ge=0, le=U16_MAX)
    version_minor: int = Field(ge=0, le=U16_MAX)
    header_information: bytes = b""

    @model_validator(mode="after")
    def check_information_length(self) -> FileHeader:
        expected = self.header_size - 8
        if len(self.header_information) != expected:
            raise ValueError(
                f"header_information has {len(self.header_information)} bytes, "
                f"header_size implies {expected}"
            )
        return self

    @property
    def version(self) -> Version:
        return Version(self.version_major, self.version_minor)

    def header_information_as_str(self) -> str:
        """Return the header information as text.

        Raises:
            HeaderTextError: If the stored bytes are not valid UTF-8.
        """
        try:
            return self.header_information.decode("utf-8")
        except UnicodeDecodeError as e:
            raise HeaderTextError(f"Header information is not valid UTF-8: {e}") from e


class Point(BaseModel):
    """One discrete LiDAR return.

    ``class_id``, ``rho`` and ``reflectance`` only exist in newer file
    versions and are ``None`` on points read from files that do not carry them.
    """

    time: float = 0.0
    range: float = 0.0
    theta: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    amplitude: int = Field(default=0, ge=0, le=U16_MAX)
    width: int = Field(default=0, ge=0, le=U16_MAX)
    target_type: TargetType = TargetType.CenterOfGravity
    target: int = Field(default=0, ge=0, le=U8_MAX)
    num_target: int = Field(default=0, ge=0, le=U8_MAX)
    rg_index: int = Field(default=0, ge=0, le=U16_MAX)
    facet_number: int = Field(default=0, ge=0, le=U8_MAX)
    high_channel: bool = False
    class_id: int | None = Field(default=None, ge=0, le=U8_MAX)
    rho: float | None = None
    reflectance: int | None = Field(default=None, ge=I16_MIN, le=I16_MAX)

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("facet_number")
    @classmethod
    def mask_facet_number(cls, v: int) -> int:
        # Only two bits are stored on disk
        return v & FACET_MASK

    @field_validator("range", "theta", "x", "y", "z", "rho")
    @classmethod
    def round_to_float32(cls, v: float | None) -> float | None:
        """Round to the nearest float32, the precision these fields have on disk."""
        if v is None:
            return v
        with np.errstate(over="ignore"):
            single = np.float32(v)
        if np.isfinite(v) and not np.isfinite(single):
            raise ValueError(f"{v} is outside the float32 range")
        return float(single)

    def channel_desc_byte(self) -> int:
        """Pack ``facet_number`` and ``high_channel`` into the on-disk byte."""
        byte = self.facet_number & FACET_MASK
        if self.high_channel:
            byte |= HIGH_CHANNEL_BIT
        return byte


def split_channel_desc_byte(byte: int) -> tuple[int, bool]:
    """Return ``(facet_number, high_channel)`` from a channel descriptor byte."""
    return byte & FACET_MASK, (byte & HIGH_CHANNEL_BIT) == HIGH_CHANNEL_BIT
