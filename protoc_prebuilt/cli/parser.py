"""
protoc-prebuilt CLI argument parser.

This module implements the command-line interface using argparse. The only
command installs a protoc version and prints the resulting paths, which is
handy for shell-driven builds and for checking proxy or token settings.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from protoc_prebuilt import __version__
from protoc_prebuilt.core.config import PrebuiltConfig
from protoc_prebuilt.core.exceptions import ProtocPrebuiltError
from protoc_prebuilt.prebuilt import init

logger = logging.getLogger(__name__)


class CLI:
    """protoc-prebuilt command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="protoc-prebuilt",
            description="Install pre-built protobuf compiler releases",
            epilog='Use "protoc-prebuilt COMMAND --help" for command-specific help',
        )

        parser.add_argument(
            "--version", action="version", version=f"protoc-prebuilt {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )
        self._add_install_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install a protoc version and print its paths",
            description=(
                "Install a protoc release (unless already installed) and print "
                "the binary and include paths"
            ),
        )
        parser.add_argument(
            "protoc_version",
            metavar="VERSION",
            help='Release tag without the "v" prefix (e.g., 21.12, 22.0-rc3)',
        )
        parser.add_argument(
            "--out-dir",
            type=Path,
            metavar="PATH",
            help="Output root for installations (default: $OUT_DIR)",
        )
        parser.add_argument(
            "--no-check-version",
            action="store_true",
            help="Skip comparing the version reported by protoc",
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Parse arguments and execute command.

        Args:
            argv: Command-line arguments (default: sys.argv[1:])

        Returns:
            Exit code (0 for success, non-zero for errors)
        """
        args = self.parser.parse_args(argv)
        self._configure_logging(args)

        if not args.command:
            self.parser.print_help()
            return 0

        return self._run_install(args)

    def _configure_logging(self, args):
        """Configure logging based on verbose/quiet flags."""
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,
        )

    def _run_install(self, args) -> int:
        config = PrebuiltConfig.from_env()
        if args.out_dir is not None:
            config = dataclasses.replace(config, out_dir=args.out_dir)
        if args.no_check_version:
            config = dataclasses.replace(config, check_version=False)

        try:
            protoc_bin, protoc_include = init(args.protoc_version, config)
        except ProtocPrebuiltError as e:
            logger.error(str(e))
            return 1

        print(f"protoc: {protoc_bin}")
        print(f"include: {protoc_include}")
        return 0


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
