"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import numpy as np
from PIL import Image


def gradient_array(width=64, height=64, reverse=False):
    """Horizontal ramp, dark on the left (or on the right if reverse)."""
    row = np.arange(width, dtype=np.float64) * (255.0 / (width - 1))
    if reverse:
        row = row[::-1]
    return np.tile(np.round(row).astype(np.uint8), (height, 1))


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Point the user config at an empty directory for every test."""
    from dupescan.user_config import get_user_config

    monkeypatch.setenv('DUPESCAN_CONFIG_DIR', str(tmp_path / 'config'))
    for var in ('DUPESCAN_HASH_METHOD', 'DUPESCAN_WORKERS', 'DUPESCAN_SHOW_PROGRESS'):
        monkeypatch.delenv(var, raising=False)
    config = get_user_config()
    config.reload()
    yield config
    config.reload()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample files for testing.

    Returns:
        dict with paths to:
        - original.png, copy.png (byte-identical)
        - mirrored.png (distinct image)
        - photo.jpg (JPEG/JFIF)
        - renamed.dat (a PNG without an image extension)
        - fake.png (text file with a .png name)
        - broken.jpg (EXIF signature followed by garbage)
    """
    images = {}

    original = temp_dir / "original.png"
    Image.fromarray(gradient_array()).save(original, 'PNG')
    images['original'] = str(original)

    copy = temp_dir / "copy.png"
    shutil.copyfile(original, copy)
    images['copy'] = str(copy)

    mirrored = temp_dir / "mirrored.png"
    Image.fromarray(gradient_array(reverse=True)).save(mirrored, 'PNG')
    images['mirrored'] = str(mirrored)

    photo = temp_dir / "photo.jpg"
    Image.new('RGB', (40, 30), color=(200, 30, 30)).save(photo, 'JPEG')
    images['photo'] = str(photo)

    renamed = temp_dir / "renamed.dat"
    Image.new('RGB', (20, 20), color='green').save(renamed, 'PNG')
    images['renamed'] = str(renamed)

    fake = temp_dir / "fake.png"
    fake.write_text("not an image at all")
    images['fake'] = str(fake)

    broken = temp_dir / "broken.jpg"
    broken.write_bytes(b'\xff\xd8\xff\xe1' + b'\x00garbage' * 16)
    images['broken'] = str(broken)

    return images


@pytest.fixture
def duplicate_dir(temp_dir):
    """
    Directory with two identical copies of one image plus one distinct image.
    """
    gradient = Image.fromarray(gradient_array())
    gradient.save(temp_dir / "first.png", 'PNG')
    shutil.copyfile(temp_dir / "first.png", temp_dir / "second.png")
    Image.fromarray(gradient_array(reverse=True)).save(temp_dir / "other.png", 'PNG')
    return temp_dir
