"""
Grayscale/resize preprocessing for the hash algorithms.

Turns a decoded Pillow image into a small luminance grid.
"""

from __future__ import annotations

from .dependencies import Image, np

# Single-channel integer modes Pillow uses for 16-bit grayscale PNGs
_WIDE_GRAY_MODES = ('I', 'I;16', 'I;16B', 'I;16L', 'I;16N')
_WIDE_GRAY_MAX = 65535.0


def to_grayscale_grid(img: Image.Image, width: int, height: int) -> np.ndarray:
    """
    Reduce an image to a luminance grid of exactly width x height.

    16-bit grayscale images are resized at full depth and scaled by 65535;
    everything else goes through 8-bit 'L' and is scaled by 255.

    Args:
        img: Decoded image (any mode)
        width: Number of columns in the result
        height: Number of rows in the result

    Returns:
        float64 array of shape (height, width), row-major, values in [0, 1]
    """
    if img.mode in _WIDE_GRAY_MODES:
        wide = img if img.mode == 'I' else img.convert('I')
        small = wide.convert('F').resize((width, height), Image.Resampling.BILINEAR)
        grid = np.asarray(small, dtype=np.float64) / _WIDE_GRAY_MAX
        return np.clip(grid, 0.0, 1.0)

    gray = img if img.mode == 'L' else img.convert('L')
    small = gray.resize((width, height), Image.Resampling.BILINEAR)
    return np.asarray(small, dtype=np.float64) / 255.0


__all__ = ['to_grayscale_grid']
