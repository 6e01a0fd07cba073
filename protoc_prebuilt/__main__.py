"""
Entry point for running protoc-prebuilt CLI as a module.

Usage: python -m protoc_prebuilt [command] [options]
"""

from protoc_prebuilt.cli.parser import main

if __name__ == "__main__":
    main()
