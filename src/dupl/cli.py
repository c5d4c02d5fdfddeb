#!/usr/bin/env python3
"""
dupl CLI: command line interface for duplicate file detection.
Finds files with byte-identical content under one or more directories and reports
them; optionally stores the redundant paths in a timestamped text file.
Nothing is ever modified or deleted.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import signal
import sys
import threading
from typing import List, Optional, NoReturn

from dupl import __version__
from dupl.core.models import ScanParams, ScanReport, ReportFormat, default_workers
from dupl.commands import DuplicateScanCommand
from dupl.services.report_service import ReportBuilder
from dupl.services.export_service import ExportService
from dupl.aliases import (
    ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    FORMAT_ALIASES, FORMAT_CHOICES, FORMAT_HELP_TEXT,
    EPILOG_TEXT
)

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INTERRUPTED = 130


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.verbose: bool = False
        self.quiet: bool = False
        self.report_format: ReportFormat = ReportFormat.TEXT
        self._stop_event = threading.Event()

        # UTF-8 for Windows consoles; undecodable file name bytes are written back unchanged
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8', errors='surrogateescape')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupl",
            description="Find duplicate files recursively based on content hash.",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "directories",
            nargs="*",
            metavar="directory",
            help="One or more directories to search recursively.\n"
                 "Defaults to the current directory (.) if none specified."
        )

        # Filtering options
        parser.add_argument(
            "--filetypes", "-f",
            nargs="+",
            action="extend",
            default=[],
            type=str,
            metavar="EXT",
            help="Limit search to specific file extensions (e.g., jpg png mov).\n"
                 "Do not include the leading dot (.). Matching is case-sensitive."
        )

        # Hashing options
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-j",
            default=default_workers(),
            type=int,
            metavar="N",
            help="Number of files sized/hashed in parallel. Default: number of CPUs"
        )
        parser.add_argument(
            "--strict-roots",
            action="store_true",
            help="Treat a missing or unreadable directory as an error instead of skipping it"
        )

        # Actions
        parser.add_argument(
            "--store", "-s",
            action="store_true",
            help="Store the paths of all duplicate files (all except one from each set)\n"
                 "to duplicates_YYYYMMDD_HHMMSS.txt in the output directory."
        )
        parser.add_argument(
            "--output-dir", "-o",
            default=".",
            type=str,
            metavar="DIR",
            help="Directory for the stored duplicates list. Default: current directory"
        )

        # Output options
        parser.add_argument(
            "--list", "-l",
            action="store_true",
            dest="list_sets",
            help="Show every duplicate set after the summary"
        )
        parser.add_argument(
            "--format",
            choices=FORMAT_CHOICES,
            default="text",
            type=str,
            help=FORMAT_HELP_TEXT
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress warnings and progress output"
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show progress and per-stage statistics"
        )
        parser.add_argument(
            "--version", "-v",
            action="version",
            version=f"%(prog)s version {__version__}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before any scan work."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        if args.workers < 1:
            self.error_exit("--workers must be at least 1")

        if args.store:
            output_dir = os.path.abspath(args.output_dir)
            if not os.path.isdir(output_dir):
                self.error_exit(f"Output directory not found: {args.output_dir}")
            if not os.access(output_dir, os.W_OK | os.X_OK):
                self.error_exit(f"Output directory is not writable: {args.output_dir}")

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        # "-f jpg,png" and "-f jpg png" are equivalent
        extensions: List[str] = []
        for item in args.filetypes:
            extensions.extend(part for part in item.split(",") if part.strip())

        try:
            return ScanParams(
                roots=list(args.directories),
                extensions=extensions,
                algorithm=args.algorithm,
                workers=args.workers,
                strict_roots=args.strict_roots,
                export=args.store,
                export_dir=args.output_dir
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
        if self.quiet:
            level = logging.ERROR
        elif self.verbose:
            level = logging.INFO
        else:
            level = logging.WARNING
        logging.getLogger("dupl").setLevel(level)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress on stderr."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def stopped_flag(self) -> bool:
        """True once the user asked to stop (Ctrl+C)."""
        return self._stop_event.is_set()

    def _handle_sigint(self, signum, frame) -> None:
        if self._stop_event.is_set():
            # Second Ctrl+C: stop waiting for in-flight files
            raise KeyboardInterrupt
        self._stop_event.set()
        self.warning("Interrupt received, finishing files in progress (Ctrl+C again to abort)")

    def run_scan(self, params: ScanParams) -> ScanReport:
        """Execute the scan workflow."""
        if self.verbose:
            sys.stderr.write("Starting duplicate file search...\n")
            sys.stderr.write(f"Searching in: {' '.join(params.roots)}\n")
            if params.extensions:
                sys.stderr.write(f"Filtering by filetypes: {' '.join(params.extensions)}\n")

        command = DuplicateScanCommand()
        try:
            report = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except ValueError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
            if report.stats is not None:
                sys.stderr.write(report.stats.print_summary() + "\n")
        return report

    def output_report(self, report: ScanReport, list_sets: bool = False) -> None:
        """The report always goes to stdout, whatever the warnings were."""
        print(ReportBuilder().render(report, fmt=self.report_format, list_sets=list_sets))

    def store_duplicates(self, report: ScanReport, output_dir: str) -> None:
        if not report.has_duplicates:
            self.notice("No duplicate files found to store.")
            return

        target = ExportService.export_redundant_paths(report, directory=output_dir)
        if target is not None:
            self.notice(
                f"Storing paths of {report.duplicate_file_count} duplicate files to: {target}"
            )

    def notice(self, message: str) -> None:
        """User-facing status line; kept off stdout when stdout carries key=value output."""
        stream = sys.stderr if self.report_format == ReportFormat.KEY_VALUE else sys.stdout
        print(message, file=stream)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = EXIT_CONFIG_ERROR) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit code."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.report_format = FORMAT_ALIASES.get(args.format, ReportFormat.TEXT)

        self.validate_args(args)
        params = self.create_params(args)
        self.configure_logging()

        # signal handlers can only be installed from the main thread
        install_handler = threading.current_thread() is threading.main_thread()
        if install_handler:
            previous_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        try:
            report = self.run_scan(params)
        finally:
            if install_handler:
                signal.signal(signal.SIGINT, previous_handler or signal.default_int_handler)

        self.output_report(report, list_sets=args.list_sets)

        if params.export:
            self.store_duplicates(report, params.export_dir)

        return EXIT_INTERRUPTED if report.cancelled else EXIT_OK


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        if os.environ.get("DUPL_DEBUG") or os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
