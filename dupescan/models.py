"""
Data models for dupescan.

Contains the hash value type, per-file results, duplicate groups and the
result of a whole scan.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import Optional

import imagehash
import numpy as np

from .config import HASH_BITS, HASH_SIZE
from .errors import ConfigurationError

ImagePath = str

_HASH_LIMIT = 1 << HASH_BITS


class HashMethod(enum.Enum):
    """Perceptual hash algorithm used for a run."""

    AVERAGE = 'average'
    PERCEPTUAL = 'perceptual'
    DIFFERENCE = 'difference'

    @classmethod
    def names(cls) -> list[str]:
        return [m.value for m in cls]

    @classmethod
    def from_name(cls, name) -> 'HashMethod':
        """
        Look up a hash method by name (case-insensitive).

        Args:
            name: Method name such as 'average' or 'Perceptual', or a HashMethod

        Returns:
            The matching HashMethod

        Raises:
            ConfigurationError: If the name is not a known method
        """
        if isinstance(name, cls):
            return name
        key = str(name or '').strip().lower()
        for method in cls:
            if method.value == key:
                return method
        raise ConfigurationError(
            f"Invalid hash method '{name}', must be one of {', '.join(cls.names())}"
        )


@dataclass(frozen=True)
class ImageHash:
    """
    A 64-bit perceptual fingerprint.

    Bit ``row * 8 + col`` holds the decision for cell (row, col) of the 8x8
    grid. Equality is bitwise; there is no meaningful ordering.
    """
    value: int = 0

    def __post_init__(self):
        if not 0 <= self.value < _HASH_LIMIT:
            raise ValueError(f"Hash value out of range for {HASH_BITS} bits: {self.value}")

    @classmethod
    def from_grid(cls, decisions) -> 'ImageHash':
        """Encode a grid of booleans, row-major, keeping at most 64 cells."""
        flat = np.asarray(decisions, dtype=bool).ravel()[:HASH_BITS]
        value = 0
        for bit_index in np.flatnonzero(flat):
            value |= 1 << int(bit_index)
        return cls(value)

    @classmethod
    def from_hex(cls, hex_str: str) -> 'ImageHash':
        """Parse the imagehash-compatible hex form produced by to_hex()."""
        parsed = imagehash.hex_to_hash(hex_str)
        return cls.from_grid(parsed.hash)

    def bit(self, index: int) -> int:
        if not 0 <= index < HASH_BITS:
            raise IndexError(f"Bit index out of range: {index}")
        return (self.value >> index) & 1

    def to_grid(self) -> np.ndarray:
        """Return the 8x8 boolean decision grid."""
        flat = [(self.value >> i) & 1 for i in range(HASH_BITS)]
        return np.array(flat, dtype=bool).reshape(HASH_SIZE, HASH_SIZE)

    def to_imagehash(self) -> imagehash.ImageHash:
        return imagehash.ImageHash(self.to_grid())

    def to_hex(self) -> str:
        return str(self.to_imagehash())

    @property
    def bits(self) -> str:
        """64-character binary pattern, most significant bit first."""
        return format(self.value, f'0{HASH_BITS}b')

    def __int__(self):
        return self.value

    def __str__(self):
        return self.bits


@dataclass(frozen=True)
class HashedImage:
    """One decoded image and the hash computed for it."""
    path: ImagePath
    hash: ImageHash


@dataclass(frozen=True)
class HashFailure:
    """A candidate that could not be hashed (open, read or decode error)."""
    path: ImagePath
    reason: str


@dataclass
class DuplicateGroup:
    """
    Images sharing one hash value.

    Attributes:
        hash: The shared hash
        paths: Member file paths, in arrival order
    """
    hash: ImageHash
    paths: list = field(default_factory=list)

    @property
    def image_count(self) -> int:
        return len(self.paths)

    @property
    def filenames(self) -> list[str]:
        return [os.path.basename(p) for p in self.paths]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'hash': self.hash.bits,
            'hex': self.hash.to_hex(),
            'image_count': self.image_count,
            'paths': list(self.paths),
        }


@dataclass
class ScanResult:
    """
    Outcome of a duplicate scan.

    Attributes:
        hash_method: Algorithm used for every hash in this run
        groups: Mapping of hash to every path that produced it
        candidate_count: Number of files sniffed as PNG/JPEG
        failures: Candidates skipped because they could not be hashed
    """
    hash_method: HashMethod
    groups: dict = field(default_factory=dict)
    candidate_count: int = 0
    failures: list = field(default_factory=list)

    @property
    def hashed_count(self) -> int:
        return sum(len(paths) for paths in self.groups.values())

    def duplicate_groups(self) -> list[DuplicateGroup]:
        """Groups with two or more members."""
        return [
            DuplicateGroup(hash=image_hash, paths=list(paths))
            for image_hash, paths in self.groups.items()
            if len(paths) > 1
        ]

    def group_for(self, image_hash: ImageHash) -> Optional[list]:
        return self.groups.get(image_hash)


__all__ = [
    'ImagePath',
    'HashMethod',
    'ImageHash',
    'HashedImage',
    'HashFailure',
    'DuplicateGroup',
    'ScanResult',
]
