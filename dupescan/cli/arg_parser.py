"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
dupescan command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..models import HashMethod


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance

    Notes:
        - The hash method is validated after parsing, so an unknown name is
          reported as a configuration error rather than a usage error
        - Defaults left as None are filled from the user configuration
    """
    methods = ', '.join(HashMethod.names())
    parser = argparse.ArgumentParser(
        prog='dupescan',
        description='Find duplicate images by perceptual hash',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Hash methods: {methods}

Examples:
  %(prog)s /path/to/photos
      Report duplicates using the average hash

  %(prog)s /path/to/photos --hash-method perceptual
      Use the DCT-based perceptual hash (more robust to recompression)

  %(prog)s /path/to/photos -m difference --export dupes.csv --export-format csv
      Use the gradient hash and save the groups as CSV
        """
    )

    # Positional argument
    parser.add_argument(
        'directory',
        type=Path,
        nargs='?',
        default=None,
        help='Directory to scan for duplicate images'
    )

    # Scanning options
    parser.add_argument(
        '-m', '--hash-method',
        default=None,
        help=f'Hash method ({methods}). Default: from config, else average'
    )

    parser.add_argument(
        '-r', '--no-recursive',
        action='store_true',
        help='Do not scan subdirectories'
    )

    # Performance options
    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help='Number of parallel workers. Default: from config, else CPU count'
    )

    # Export options
    parser.add_argument(
        '-e', '--export',
        type=Path,
        help='Export results to file'
    )

    parser.add_argument(
        '--export-format',
        choices=['txt', 'csv'],
        default='txt',
        help='Export format. Default: txt'
    )

    # Output options
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '--hash-method', 'perceptual'])
        >>> args.directory
        PosixPath('/path/to/photos')
        >>> args.hash_method
        'perceptual'
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
