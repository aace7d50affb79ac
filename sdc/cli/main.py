"""sdc CLI: command-line interface for .sdc files.

Commands:
    sdc info <file> [--brief]     Show version, header information and point count
    sdc export <file>             Export points to CSV
"""

from __future__ import annotations

from pathlib import Path

import click
import numpy as np
from rich.console import Console
from rich.table import Table

from sdc import __version__
from sdc.errors import HeaderTextError, SdcError

console = Console()

_RANGE_FIELDS = ("time", "range", "x", "y", "z", "amplitude")


@click.group()
@click.version_option(version=__version__, prog_name="sdc")
def cli() -> None:
    """Work with Riegl .sdc discrete-return LiDAR files."""
    pass


@cli.command()
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--brief", is_flag=True, default=False,
              help="Only display information from the header.")
def info(file: Path, brief: bool) -> None:
    """Show file version, header information and point count."""
    from sdc import Reader
    from sdc.points import points_to_array

    try:
        reader = Reader.from_path(file)
    except (OSError, SdcError) as e:
        console.print(f"[red]ERROR: unable to create reader for {file}: {e}[/red]")
        raise SystemExit(1)

    with reader:
        console.print(f"version: {reader.version}")
        try:
            text = reader.header_information_as_str()
            console.print("header information:")
            console.print(text, markup=False, highlight=False)
        except HeaderTextError as e:
            console.print(f"[yellow]WARNING: cannot display header information: {e}[/yellow]")

        if brief:
            return

        try:
            cloud = points_to_array(reader, reader.version)
        except SdcError as e:
            console.print(
                f"[red]ERROR: failed reading point {reader.points_read + 1}: {e}[/red]"
            )
            raise SystemExit(1)

    console.print(f"number of points: {len(cloud)}")
    if len(cloud) == 0:
        return

    table = Table(title="Point Ranges")
    table.add_column("Field")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Mean", justify="right")
    for name in _RANGE_FIELDS:
        values = cloud[name].astype(np.float64)
        table.add_row(
            name,
            f"{values.min():.4f}",
            f"{values.max():.4f}",
            f"{values.mean():.4f}",
        )
    console.print(table)


@cli.command()
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Output directory")
@click.option("--no-header", is_flag=True, default=False, help="Skip the header CSV")
def export(file: Path, output: Path | None, no_header: bool) -> None:
    """Export points to CSV."""
    from sdc.export.csv import export_csv

    try:
        created = export_csv(file, output_dir=output, include_header=not no_header)
    except SdcError as e:
        console.print(f"[red]Error exporting {file}: {e}[/red]")
        raise SystemExit(1)

    for p in created:
        console.print(f"  Created: {p}")
    console.print(f"[green]Exported {len(created)} CSV file(s)[/green]")


if __name__ == "__main__":
    cli()
