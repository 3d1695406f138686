"""
Entry point for the longtts package when run as a module.

This allows the package to be executed directly with:
    python -m longtts
"""

from .cli import main

if __name__ == "__main__":
    main()
