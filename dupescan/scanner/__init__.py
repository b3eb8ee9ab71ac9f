"""
Scanner package for dupescan.

Provides file discovery, perceptual hashing and duplicate grouping.

Public API:
- find_image_files: Discover PNG/JPEG files by magic bytes
- sniff_image_type: Identify a file's image type from its header
- average_hash / perceptual_hash / difference_hash: 64-bit image hashes
- compute_hash: Hash a decoded image with a chosen method
- hash_image_file: Decode and hash one file
- hash_images_parallel: Hash many files concurrently
- group_by_hash: Aggregate results into hash groups
- find_duplicates: Full scan of a directory
"""

from __future__ import annotations

# Import public functions from submodules
from .file_discovery import find_image_files, sniff_image_type, walk_files
from .preprocess import to_grayscale_grid
from .hashing import (
    average_hash,
    perceptual_hash,
    difference_hash,
    compute_hash,
    hash_image_file,
)
from .parallel import WorkGroup, fan_out, hash_images_parallel
from .deduplication import group_by_hash, find_duplicates


# Public API exports
__all__ = [
    # File discovery
    'find_image_files',
    'sniff_image_type',
    'walk_files',
    # Hashing functions
    'to_grayscale_grid',
    'average_hash',
    'perceptual_hash',
    'difference_hash',
    'compute_hash',
    'hash_image_file',
    # Concurrency
    'WorkGroup',
    'fan_out',
    'hash_images_parallel',
    # Duplicate detection
    'group_by_hash',
    'find_duplicates',
]
