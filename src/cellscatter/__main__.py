"""Run with: python -m cellscatter [dataset.json]"""
import sys

from cellscatter.main import main

if __name__ == "__main__":
    sys.exit(main())
