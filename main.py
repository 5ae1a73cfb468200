#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py run path/to/photos

Or use the full CLI:

    python -m bayer_dither.cli run --help
    python -m bayer_dither.cli matrix --order 4
"""

from bayer_dither.cli import app

if __name__ == "__main__":
    app()
