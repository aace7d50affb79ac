"""CSV export for .sdc files.

Exports a file to:
  - {stem}_points.csv: one row per point
  - {stem}_header.csv: version and header information
"""

from __future__ import annotations

import csv
from pathlib import Path

from sdc.errors import HeaderTextError
from sdc.points import point_dtype
from sdc.storage.reader import Reader


def export_csv(
    path: str | Path,
    output_dir: str | Path | None = None,
    include_header: bool = True,
) -> list[Path]:
    """Export an .sdc file to CSV files.

    Args:
        path: Path to the .sdc file.
        output_dir: Directory for output files. Defaults to same directory as input.
        include_header: Whether to write a header CSV.

    Returns:
        List of paths to created CSV files.
    """
    path = Path(path)

    if output_dir is None:
        out = path.parent
    else:
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)

    created: list[Path] = []
    with Reader.from_path(path) as reader:
        points_path = out / f"{path.stem}_points.csv"
        _write_points_csv(reader, points_path)
        created.append(points_path)

        if include_header:
            header_path = out / f"{path.stem}_header.csv"
            _write_header_csv(reader, header_path)
            created.append(header_path)

    return created


def _write_points_csv(reader: Reader, path: Path) -> None:
    """Stream every point of ``reader`` to a CSV file."""
    columns = point_dtype(reader.version).names

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        for point in reader:
            row = []
            for name in columns:
                value = getattr(point, name)
                if isinstance(value, bool):
                    row.append(int(value))
                elif isinstance(value, float):
                    row.append(repr(value))
                else:
                    row.append(int(value))
            writer.writerow(row)


def _write_header_csv(reader: Reader, path: Path) -> None:
    """Write version and header information to a CSV file."""
    header = reader.header
    try:
        text = header.header_information_as_str()
    except HeaderTextError:
        text = f"<{len(header.header_information)} bytes, not UTF-8>"

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["key", "value"])
        writer.writerow(["version", str(header.version)])
        writer.writerow(["header_size", header.header_size])
        writer.writerow(["header_information", text])
