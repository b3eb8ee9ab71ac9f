"""
Configuration constants for dupescan.

This module contains the fixed settings of a run:
- Hash resolution and preprocessing sizes
- Magic byte signatures used to sniff candidate files
- Defaults for the hash method and worker pool
"""

import os

# Hashes are an 8x8 decision grid = 64 bits
HASH_SIZE = 8
HASH_BITS = HASH_SIZE * HASH_SIZE

# Perceptual hash samples a 32x32 grid before the DCT
PERCEPTUAL_SAMPLE_SIZE = 32

# Difference hash compares each pixel with its right neighbour,
# so it needs one extra column
DIFFERENCE_SAMPLE_WIDTH = HASH_SIZE + 1
DIFFERENCE_SAMPLE_HEIGHT = HASH_SIZE

# Number of header bytes inspected when sniffing a file
MAGIC_LENGTH = 4

# Known-good signatures (first 4 bytes of the file)
PNG_MAGIC_BYTES = b'\x89PNG'
JPEG_MAGIC_BYTES = b'\xff\xd8\xff\xe0'        # JFIF
JPEG_EXIF_MAGIC_BYTES = b'\xff\xd8\xff\xe1'   # EXIF

MAGIC_SIGNATURES = {
    PNG_MAGIC_BYTES: 'png',
    JPEG_MAGIC_BYTES: 'jpeg',
    JPEG_EXIF_MAGIC_BYTES: 'jpeg',
}

# Hash method used when none is given
DEFAULT_HASH_METHOD = 'average'

# Worker pool size for sniffing and hashing
DEFAULT_WORKERS = os.cpu_count() or 4

# Decompression bomb limit applied to Pillow
MAX_IMAGE_PIXELS = 500_000_000
