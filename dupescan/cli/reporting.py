"""
Report formatting and display for the CLI interface.

Provides functions to format and print duplicate detection results in a
human-readable format.
"""

from __future__ import annotations

from ..models import DuplicateGroup, ScanResult


def sorted_groups(result: ScanResult) -> list[DuplicateGroup]:
    """Duplicate groups ordered by hash value, for stable output."""
    return sorted(result.duplicate_groups(), key=lambda g: g.hash.value)


def _format_group_header(group: DuplicateGroup) -> str:
    return f"Hash: {group.hash.bits} ({group.hash.to_hex()})"


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def print_duplicate_report(result: ScanResult) -> None:
    """
    Print the duplicate report for a scan.

    Args:
        result: Outcome of find_duplicates

    Notes:
        - Prints to stdout
        - Only hashes with two or more images are listed
        - Files that could not be hashed are not mentioned here; they are
          logged while scanning
    """
    groups = sorted_groups(result)
    total_duplicates = sum(g.image_count - 1 for g in groups)

    print("\n" + "=" * 70)
    print("DUPLICATE IMAGE REPORT")
    print("=" * 70)
    print(f"\nHash method: {result.hash_method.value}")
    print(f"Found {result.candidate_count:,} images")
    print(f"Duplicates found: {total_duplicates:,} files in {len(groups):,} groups")

    if groups:
        _print_section_header("Potential Duplicates:")
        for group in groups:
            print(_format_group_header(group))
            for path in group.paths:
                print(f"\t path= {path}")

    print("=" * 70)


__all__ = ['sorted_groups', 'print_duplicate_report']
