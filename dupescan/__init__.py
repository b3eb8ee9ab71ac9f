"""
dupescan
========
Find visually duplicate images by perceptual hash.

Features:
- Content sniffing: PNG/JPEG files are found by magic bytes, not extension
- Three 64-bit hashes: average, perceptual (DCT) and difference (gradient)
- Concurrent sniffing and hashing on a bounded worker pool
- Groups images whose hashes are bit-for-bit identical
- CLI with TXT/CSV export
"""

__version__ = "1.0.0"
__author__ = "dupescan contributors"

from .errors import DupeScanError, ConfigurationError, TraversalError
from .models import (
    HashMethod,
    ImageHash,
    HashedImage,
    HashFailure,
    DuplicateGroup,
    ScanResult,
)
from .config import HASH_SIZE, HASH_BITS, DEFAULT_HASH_METHOD
from .dct import CosineTable, DCTEngine, get_default_engine
from .scanner import (
    find_image_files,
    sniff_image_type,
    average_hash,
    perceptual_hash,
    difference_hash,
    compute_hash,
    hash_image_file,
    hash_images_parallel,
    group_by_hash,
    find_duplicates,
)

__all__ = [
    "DupeScanError",
    "ConfigurationError",
    "TraversalError",
    "HashMethod",
    "ImageHash",
    "HashedImage",
    "HashFailure",
    "DuplicateGroup",
    "ScanResult",
    "HASH_SIZE",
    "HASH_BITS",
    "DEFAULT_HASH_METHOD",
    "CosineTable",
    "DCTEngine",
    "get_default_engine",
    "find_image_files",
    "sniff_image_type",
    "average_hash",
    "perceptual_hash",
    "difference_hash",
    "compute_hash",
    "hash_image_file",
    "hash_images_parallel",
    "group_by_hash",
    "find_duplicates",
]
