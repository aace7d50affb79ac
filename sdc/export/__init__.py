"""Export modules for .sdc files."""

from sdc.export.csv import export_csv

__all__ = ["export_csv"]
