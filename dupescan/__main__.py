"""
Allow running the package with: python -m dupescan

Examples:
    python -m dupescan /path/to/photos                 # Scan with the average hash
    python -m dupescan /path/to/photos -m perceptual   # Scan with the DCT hash
    python -m dupescan config                          # Show configuration
    python -m dupescan config --init                   # Create example config file
"""

import sys


def show_config() -> int:
    from .user_config import get_user_config

    config = get_user_config()

    if '--init' in sys.argv or '-i' in sys.argv:
        if config.create_example_config():
            print(f"✓ Created example configuration file at:")
            print(f"  {config.config_file_path}")
            return 0
        print(f"✗ Failed to create configuration file.")
        return 1

    print(f"Configuration file: {config.config_file_path}")
    if config.config_file_path.exists():
        print(f"Status: ✓ Found")
    else:
        print(f"Status: ✗ Not found (using defaults)")
        print(f"\nRun 'python -m dupescan config --init' to create one.")

    print(f"\nCurrent settings:")
    print(f"  default_hash_method: {config.default_hash_method}")
    print(f"  default_workers: {config.default_workers}")
    print(f"  show_progress: {config.show_progress}")
    return 0


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'config':
        # Remove 'config' from argv
        sys.argv.pop(1)
        sys.exit(show_config())

    from .cli import main as cli_main
    sys.exit(cli_main())


if __name__ == '__main__':
    main()
