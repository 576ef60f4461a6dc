#!/usr/bin/env python3
"""
Tile Cache Warmer - Main Entry Point
Requests every tile of a region from a tile server so its cache is filled
before real traffic arrives.
"""

import sys
import os

# Add src directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, current_dir)

from core.warm_manager import WarmManager
from exceptions.tile_warmer_exceptions import TileWarmerException


def main(argv=None):
    """Main entry point for the tile cache warmer"""
    try:
        manager = WarmManager()
        success = manager.run_from_command_line(argv)
    except KeyboardInterrupt:
        print("\nWarming interrupted by user.")
        sys.exit(1)
    except TileWarmerException as e:
        print(f"\nError: {e}")
        sys.exit(1)

    if not success:
        sys.exit(1)


if __name__ == "__main__":
    main()
