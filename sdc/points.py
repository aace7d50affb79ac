"""Structured numpy views of .sdc points.

Usage:
    from sdc.points import read_points

    cloud = read_points("scan.sdc")
    print(cloud["x"].max(), len(cloud))
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

import numpy as np

from sdc.storage.reader import Reader
from sdc.utils.schema import Point, Version

_BASE_FIELDS = [
    ("time", np.float64),
    ("range", np.float32),
    ("theta", np.float32),
    ("x", np.float32),
    ("y", np.float32),
    ("z", np.float32),
    ("amplitude", np.uint16),
    ("width", np.uint16),
    ("target_type", np.uint8),
    ("target", np.uint8),
    ("num_target", np.uint8),
    ("rg_index", np.uint16),
    ("facet_number", np.uint8),
    ("high_channel", np.bool_),
]


def point_dtype(version: tuple[int, int]) -> np.dtype:
    """Structured dtype with one field per point attribute in ``version``."""
    version = Version(*version)
    fields = list(_BASE_FIELDS)
    if version.has_class_id:
        fields.append(("class_id", np.uint8))
    if version.has_rho:
        fields.append(("rho", np.float32))
    if version.has_reflectance:
        fields.append(("reflectance", np.int16))
    return np.dtype(fields)


def points_to_array(points: Iterable[Point], version: tuple[int, int]) -> np.ndarray:
    """Pack points into a structured array of :func:`point_dtype`."""
    dtype = point_dtype(version)
    names = dtype.names
    rows = [tuple(getattr(p, name) for name in names) for p in points]
    if not rows:
        return np.empty(0, dtype=dtype)
    return np.array(rows, dtype=dtype)


def read_points(path: str | os.PathLike) -> np.ndarray:
    """Load every point of an .sdc file.

    Args:
        path: Path to the ``.sdc`` file.

    Returns:
        Structured numpy array of shape ``(N,)``; optional columns are
        present only when the file version carries them.
    """
    with Reader.from_path(Path(path)) as reader:
        return points_to_array(reader, reader.version)
