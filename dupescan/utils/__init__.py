"""
Utilities package for dupescan.

Provides:
- exporters: Export duplicate results to files
"""

from __future__ import annotations

from . import exporters
from .exporters import export_results

__all__ = [
    'exporters',
    'export_results',
]
