"""Entry point for python -m record_dedupe execution.

This module enables running record-dedupe as a module:
    python -m record_dedupe --help
    python -m record_dedupe find contacts.csv --type contact
"""

from record_dedupe.cli import app

if __name__ == "__main__":
    app()
