#!/usr/bin/env python3
"""linepad - A minimal modal text editor.

Usage:
    python main.py [filename]
"""

from linepad.__main__ import main


if __name__ == "__main__":
    main()
