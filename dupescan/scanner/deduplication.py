"""
Deduplication module for the scanner package.

Groups images whose perceptual hashes are identical. The aggregation runs in
the consuming thread only; worker threads never touch the mapping.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from ..config import DEFAULT_WORKERS
from ..dct import DCTEngine
from ..models import HashMethod, HashedImage, HashFailure, ImageHash, ScanResult
from .file_discovery import find_image_files
from .parallel import hash_images_parallel


def group_by_hash(
    results: Iterable[Union[HashedImage, HashFailure]],
    hash_method: HashMethod = HashMethod.AVERAGE,
) -> ScanResult:
    """
    Aggregate a stream of per-file results into hash groups.

    Each HashedImage is appended to the list for its hash, created on first
    occurrence. Failures are collected separately and never join a group.

    Args:
        results: Results in any order
        hash_method: Method that produced the hashes

    Returns:
        ScanResult with every hash, including single-member ones
    """
    groups: dict[ImageHash, list[str]] = {}
    failures: list[HashFailure] = []

    for result in results:
        if isinstance(result, HashFailure):
            failures.append(result)
            continue
        groups.setdefault(result.hash, []).append(result.path)

    return ScanResult(hash_method=hash_method, groups=groups, failures=failures)


def find_duplicates(
    root_path: str | Path,
    hash_method: Union[HashMethod, str],
    recursive: bool = True,
    max_workers: int = DEFAULT_WORKERS,
    engine: Optional[DCTEngine] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
) -> ScanResult:
    """
    Find images under root_path that share a perceptual hash.

    Args:
        root_path: Directory to scan
        hash_method: 'average', 'perceptual' or 'difference' (or a HashMethod)
        recursive: If True, scan subdirectories
        max_workers: Number of parallel workers for sniffing and hashing
        engine: DCT engine for the perceptual method
        progress_callback: Optional callback(current, total) for hashing progress
        show_progress: Whether to show tqdm progress bar
        logger: Optional logger for status messages

    Returns:
        ScanResult; use duplicate_groups() for groups with 2+ members

    Raises:
        ConfigurationError: If the hash method is unknown (before scanning)
        TraversalError: If the directory tree cannot be walked
    """
    method = HashMethod.from_name(hash_method)

    image_files = find_image_files(root_path, recursive=recursive, max_workers=max_workers)
    if logger:
        logger.info(f"Found {len(image_files):,} images")

    result = group_by_hash(
        hash_images_parallel(
            image_files,
            method,
            max_workers=max_workers,
            engine=engine,
            progress_callback=progress_callback,
            show_progress=show_progress,
        ),
        hash_method=method,
    )
    result.candidate_count = len(image_files)

    if logger:
        if result.failures:
            logger.warning(f"Could not hash {len(result.failures):,} files")
        logger.info(
            f"Hashed {result.hashed_count:,} images into {len(result.groups):,} distinct hashes"
        )

    return result


__all__ = ['group_by_hash', 'find_duplicates']
