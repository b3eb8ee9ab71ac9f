"""
File discovery module for the scanner package.

Walks a directory tree and keeps the files whose first bytes carry a PNG or
JPEG signature. The file extension is not consulted: a renamed JPEG is still
a candidate and a text file called ``photo.png`` is not.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional

from ..config import DEFAULT_WORKERS, MAGIC_LENGTH, MAGIC_SIGNATURES
from ..errors import TraversalError
from .dependencies import _logger
from .parallel import fan_out


def sniff_image_type(filepath: str | Path) -> Optional[str]:
    """
    Identify an image by its magic bytes.

    Args:
        filepath: File to inspect

    Returns:
        'png' or 'jpeg' for a known signature, None otherwise (including
        files shorter than the signature and files that cannot be read)
    """
    try:
        with open(filepath, 'rb') as f:
            header = f.read(MAGIC_LENGTH)
    except OSError as e:
        _logger.debug(f"Cannot sniff {filepath}: {e}")
        return None

    if len(header) != MAGIC_LENGTH:
        return None
    return MAGIC_SIGNATURES.get(header)


def walk_files(root_path: str | Path, recursive: bool = True) -> Iterator[str]:
    """
    Yield the absolute path of every regular file under root_path.

    Args:
        root_path: Directory to walk
        recursive: If True, descend into subdirectories

    Raises:
        TraversalError: If the root or any directory below it cannot be read
    """
    def _raise(error: OSError):
        raise TraversalError(error.filename or root_path, error)

    root = os.path.abspath(str(root_path))
    if not os.path.isdir(root):
        raise TraversalError(root, "not a directory")

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        for name in filenames:
            path = os.path.join(dirpath, name)
            # Skips sockets, FIFOs and dangling links
            if os.path.isfile(path):
                yield path
        if not recursive:
            dirnames.clear()


def _candidate_or_none(path: str) -> Optional[str]:
    return path if sniff_image_type(path) is not None else None


def find_image_files(
    root_path: str | Path,
    recursive: bool = True,
    max_workers: int = DEFAULT_WORKERS,
) -> list[str]:
    """
    Find all PNG/JPEG files in the given directory.

    Args:
        root_path: Directory path to search for images
        recursive: If True, search subdirectories recursively
        max_workers: Number of parallel sniffing workers

    Returns:
        List of absolute file paths, in no particular order

    Raises:
        TraversalError: If the directory tree cannot be walked
    """
    return list(fan_out(walk_files(root_path, recursive), _candidate_or_none, max_workers))


__all__ = ['sniff_image_type', 'walk_files', 'find_image_files']
