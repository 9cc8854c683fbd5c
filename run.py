"""
Development runner for the Poincaré disk editor.

Puts `src/` on the import path so the editor starts from a plain checkout,
without `pip install -e .` first.

Usage:
    $ python run.py [--debug] [--log-file PATH]
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(current_dir, 'src'))

from poincaredisk.main import main

if __name__ == "__main__":
    sys.exit(main())
