"""Run with: python -m poincaredisk"""
import sys

from poincaredisk.main import main

if __name__ == "__main__":
    sys.exit(main())
