"""
Entry point for running the crossndk CLI as a module.

Usage: python -m crossndk.cli [OPTIONS] <CARGO_ARGS>...
"""

from .parser import main

if __name__ == "__main__":
    main()
