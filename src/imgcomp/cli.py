#!/usr/bin/env python3
"""
imgcomp CLI — compare the visual similarity of image files.
Prints every pair of files whose fingerprints differ by fewer bits than the
tolerance. Fingerprints are cached between runs.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from imgcomp.core.cache import CacheError
from imgcomp.core.fingerprint import to_hex
from imgcomp.core.models import (
    ComparisonParams, FileHashEntry, SimilarPair, DEFAULT_TOLERANCE
)
from imgcomp.commands import ComparisonCommand
from imgcomp.utils.convert_utils import ConvertUtils
from imgcomp.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    TOLERANCE_HELP_TEXT, EPILOG_TEXT
)

PROGRAM_NAME = "imgcomp"


class _ArgumentParser(argparse.ArgumentParser):
    """argparse parser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        CLIApplication.error_exit(
            f"{message}\nRun '{PROGRAM_NAME} --help' for usage info."
        )


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.parser: argparse.ArgumentParser = self.build_parser()

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = _ArgumentParser(
            prog=PROGRAM_NAME,
            description="Compare similarity of image files.",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "files",
            nargs="*",
            metavar="FILES",
            help="Image files to compare (jpeg, jpg, png, gif, tiff, tif, webp, jxl, bmp, avif)"
        )

        # Hashing algorithm
        parser.add_argument(
            "--algorithm",
            choices=ALGORITHM_CHOICES,
            default="difference",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "-a", "--ahash",
            dest="algorithm",
            action="store_const",
            const="average",
            help="use aHash (average hash)"
        )
        parser.add_argument(
            "-d", "--dhash",
            dest="algorithm",
            action="store_const",
            const="difference",
            help="use dHash [DEFAULT]"
        )
        parser.add_argument(
            "-p", "--phash",
            dest="algorithm",
            action="store_const",
            const="perceptual",
            help="use pHash (perceptual hash)"
        )

        # Other options
        parser.add_argument(
            "-s", "--show-hashes",
            action="store_true",
            dest="show_hashes",
            help="Print calculated hashes of all files"
        )
        parser.add_argument(
            "-t", "--tolerance",
            default=str(DEFAULT_TOLERANCE),
            type=str,
            metavar="NUM",
            help=TOLERANCE_HELP_TEXT
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress and statistics"
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        return self.parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before any file is touched."""
        if not ConvertUtils.is_valid_tolerance(args.tolerance):
            self.error_exit(
                f"Invalid use of --tolerance, run '{PROGRAM_NAME} --help' for usage info."
            )

        if args.algorithm not in ALGORITHM_ALIASES:
            self.error_exit(
                f"Invalid hashing algorithm: '{args.algorithm}'.\n"
                f"Valid options: {', '.join(ALGORITHM_CHOICES)}"
            )

    def create_params(self, args: argparse.Namespace) -> ComparisonParams:
        """Create ComparisonParams from CLI arguments."""
        try:
            return ComparisonParams(
                paths=list(args.files),
                algorithm=ALGORITHM_ALIASES[args.algorithm],
                tolerance=ConvertUtils.parse_tolerance(args.tolerance),
                print_hashes=args.show_hashes,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    @staticmethod
    def print_hash(entry: FileHashEntry) -> None:
        print(f"{entry.path}: {to_hex(entry.fingerprint)}")

    def run_comparison(self, params: ComparisonParams) -> List[SimilarPair]:
        """Execute the comparison workflow."""
        command = ComparisonCommand()
        if self.verbose:
            print(f"Comparing {len(params.paths)} files (algorithm: {params.algorithm.display_name})...")

        try:
            pairs, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                hash_callback=self.print_hash if params.print_hashes else None
            )
        except CacheError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
            print()
            print(stats.print_summary())

        return pairs

    @staticmethod
    def output_results(pairs: List[SimilarPair]) -> None:
        """One line per similar pair, in scan order."""
        for pair in pairs:
            print(f"{pair.first.path} and {pair.second.path} are similar with a dist of {pair.distance}")

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"ERROR: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose

        self.validate_args(args)

        if not args.files:
            self.parser.print_help()
            sys.exit(0)

        if self.verbose:
            logging.getLogger("imgcomp").setLevel(logging.INFO)

        params = self.create_params(args)
        pairs = self.run_comparison(params)
        self.output_results(pairs)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\nCompleted in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"ERROR: Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
