"""
Entry point for running crossndk as a module.

Usage: python -m crossndk [OPTIONS] <CARGO_ARGS>...
"""

from crossndk.cli.parser import main

if __name__ == "__main__":
    main()
