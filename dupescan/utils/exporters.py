"""
Export functionality for dupescan.

Provides functions to export duplicate detection results to TXT and CSV.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import TextIO

from ..models import DuplicateGroup


def _export_txt(groups: list[DuplicateGroup], file_handle: TextIO) -> None:
    """
    Export duplicate results to TXT format.

    Args:
        groups: Duplicate groups to write
        file_handle: Open file handle to write to
    """
    file_handle.write("DUPLICATE IMAGE REPORT\n")
    file_handle.write("=" * 70 + "\n")

    for i, group in enumerate(groups, 1):
        file_handle.write(f"\nGroup {i} ({group.image_count} files):\n")
        file_handle.write(f"  Hash: {group.hash.bits} ({group.hash.to_hex()})\n")
        for path in group.paths:
            file_handle.write(f"  {path}\n")


def _export_csv(groups: list[DuplicateGroup], file_handle: TextIO) -> None:
    """
    Export duplicate results to CSV format.

    Notes:
        CSV includes: group_id, hash_hex, hash_bits, path
    """
    writer = csv.writer(file_handle)
    writer.writerow(['group_id', 'hash_hex', 'hash_bits', 'path'])
    for i, group in enumerate(groups, 1):
        for path in group.paths:
            writer.writerow([i, group.hash.to_hex(), group.hash.bits, path])


def export_results(
    groups: list[DuplicateGroup],
    output_path: Path,
    export_format: str = 'txt'
) -> None:
    """
    Export duplicate detection results to a file.

    Args:
        groups: Duplicate groups to export
        output_path: Path to output file
        export_format: Export format ('txt' or 'csv'). Default: 'txt'

    Raises:
        ValueError: If export_format is not 'txt' or 'csv'
        OSError: If file cannot be written
    """
    if export_format not in ('txt', 'csv'):
        raise ValueError(f"Unsupported export format: {export_format}. Use 'txt' or 'csv'.")

    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        if export_format == 'txt':
            _export_txt(groups, f)
        else:
            _export_csv(groups, f)


__all__ = ['export_results']
