"""
Hashing module for the scanner package.

Provides the three perceptual hash algorithms (average, perceptual/DCT and
difference) and the per-file task that decodes an image and hashes it.

Every algorithm produces an 8x8 grid of decisions which is packed into a
64-bit ImageHash, bit index = row * 8 + col.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Union

from ..config import (
    HASH_SIZE,
    PERCEPTUAL_SAMPLE_SIZE,
    DIFFERENCE_SAMPLE_WIDTH,
    DIFFERENCE_SAMPLE_HEIGHT,
)
from ..dct import DCTEngine, get_default_engine
from ..models import HashMethod, ImageHash, HashedImage, HashFailure
from .dependencies import Image, UnidentifiedImageError, np, _logger
from .preprocess import to_grayscale_grid

# Errors Pillow raises for payloads it cannot decode
DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
)


def _grid_mean(values: np.ndarray) -> float:
    # fsum is exactly rounded, so a uniform grid equals its own mean
    return math.fsum(values.ravel()) / values.size


def _threshold_hash(values: np.ndarray) -> ImageHash:
    """Set a bit for every cell strictly above the grid mean."""
    return ImageHash.from_grid(values > _grid_mean(values))


def average_hash(img: Image.Image) -> ImageHash:
    """
    Average hash: a bit is set where the 8x8 luminance is above the mean.

    Cells equal to the mean give 0, so a flat image hashes to 0.
    """
    pixels = to_grayscale_grid(img, HASH_SIZE, HASH_SIZE)
    return _threshold_hash(pixels)


def perceptual_hash(img: Image.Image, engine: Optional[DCTEngine] = None) -> ImageHash:
    """
    Perceptual hash from the low frequencies of a 2-D DCT.

    Steps:
    - Reduce to 32x32 grayscale in [0, 1]
    - DCT-II down the columns, then across the rows
    - Keep the top-left 8x8 block (lowest frequencies)
    - Set a bit for each coefficient above the block's mean

    Args:
        img: Decoded image
        engine: DCT engine to use (default: shared engine)

    Returns:
        64-bit ImageHash
    """
    engine = engine or get_default_engine()
    pixels = to_grayscale_grid(img, PERCEPTUAL_SAMPLE_SIZE, PERCEPTUAL_SAMPLE_SIZE)
    freqs = engine.transform(engine.transform(pixels, 0), 1)
    low_freqs = freqs[:HASH_SIZE, :HASH_SIZE]
    return _threshold_hash(low_freqs)


def difference_hash(img: Image.Image) -> ImageHash:
    """
    Difference (gradient) hash.

    Reduces to 9 columns x 8 rows; bit (i, j) is set when pixel (i, j) is
    brighter than its right neighbour (i, j + 1).
    """
    pixels = to_grayscale_grid(img, DIFFERENCE_SAMPLE_WIDTH, DIFFERENCE_SAMPLE_HEIGHT)
    return ImageHash.from_grid(pixels[:, :-1] > pixels[:, 1:])


def compute_hash(
    img: Image.Image,
    method: Union[HashMethod, str],
    engine: Optional[DCTEngine] = None,
) -> ImageHash:
    """
    Hash a decoded image with the given method.

    Raises:
        ConfigurationError: If method is not a known hash method
    """
    method = HashMethod.from_name(method)
    if method is HashMethod.AVERAGE:
        return average_hash(img)
    if method is HashMethod.PERCEPTUAL:
        return perceptual_hash(img, engine)
    return difference_hash(img)


def hash_image_file(
    filepath: Union[str, Path],
    method: HashMethod,
    engine: Optional[DCTEngine] = None,
) -> Union[HashedImage, HashFailure]:
    """
    Decode one image file and compute its hash.

    Open/read and decode problems are not raised: they are logged and
    returned as a HashFailure so the caller can skip the file.

    Args:
        filepath: Path to the image
        method: Hash method for this run
        engine: DCT engine for the perceptual method

    Returns:
        HashedImage on success, HashFailure otherwise
    """
    path = str(filepath)
    try:
        fh = open(path, 'rb')
    except OSError as e:
        _logger.warning(f"Failed to read {path}: {e}")
        return HashFailure(path=path, reason=f"read error: {e}")

    with fh:
        try:
            img = Image.open(fh)
            # Force load to detect truncated/corrupt images early
            img.load()
        except DECODE_ERRORS as e:
            _logger.warning(f"Error decoding {path}: {e}")
            return HashFailure(path=path, reason=f"decode error: {e}")

        with img:
            image_hash = compute_hash(img, method, engine)

    return HashedImage(path=path, hash=image_hash)


__all__ = [
    'DECODE_ERRORS',
    'average_hash',
    'perceptual_hash',
    'difference_hash',
    'compute_hash',
    'hash_image_file',
]
