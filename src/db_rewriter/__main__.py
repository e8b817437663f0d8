"""
Entry point for module execution (``python -m db_rewriter``).

This module delegates execution to the CLI handler in ``db_rewriter.cli.__main__``.
"""

import sys
from db_rewriter.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
