#!/usr/bin/env python3
"""FocusSync — entry point.

Run with:
    python main.py
    python -m focussync
"""

from focussync.__main__ import main


if __name__ == "__main__":
    main()
