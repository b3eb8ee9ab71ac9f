"""
CLI workflow orchestration for dupescan.

Provides the CLIOrchestrator class that coordinates the CLI workflow from
argument parsing through the final report.
"""

from __future__ import annotations

import logging

from ..errors import ConfigurationError, TraversalError
from ..models import HashMethod
from ..scanner import find_duplicates
from ..user_config import get_user_config
from ..utils.exporters import export_results
from .arg_parser import parse_arguments
from .reporting import print_duplicate_report, sorted_groups


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI scanning workflow.

    Configuration errors are reported before any scanning starts; a directory
    that cannot be traversed ends the run. Both give exit code 1.
    """

    def __init__(self, argv=None):
        self.argv = argv
        self.logger = None
        self.args = None
        self.hash_method = None
        self.workers = None
        self.show_progress = True
        self.result = None

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error)

        Workflow phases:
        1. Setup & argument parsing
        2. Validation
        3. Scanning & hashing
        4. Reporting & export
        """
        # Phase 1: Setup
        self._setup_phase()

        # Phase 2: Validation
        exit_code = self._validate_phase()
        if exit_code != 0:
            return exit_code

        # Phase 3: Scanning
        exit_code = self._scan_phase()
        if exit_code != 0:
            return exit_code

        # Phase 4: Reporting
        return self._report_phase()

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _validate_phase(self) -> int:
        """
        Phase 2: Resolve configuration and validate it.

        Returns:
            0 for success, 1 for configuration error
        """
        if self.args.directory is None:
            self.logger.error("Please supply a directory")
            return 1

        user_config = get_user_config()
        method_name = self.args.hash_method or user_config.default_hash_method
        try:
            self.hash_method = HashMethod.from_name(method_name)
        except ConfigurationError as e:
            self.logger.error(str(e))
            return 1

        workers = self.args.workers if self.args.workers is not None else user_config.default_workers
        try:
            self.workers = int(workers)
        except (TypeError, ValueError):
            self.logger.error(f"Worker count must be an integer, got {workers!r}")
            return 1
        if self.workers < 1:
            self.logger.error(f"Worker count must be at least 1, got {self.workers}")
            return 1

        self.show_progress = user_config.show_progress and not self.args.no_progress
        return 0

    def _scan_phase(self) -> int:
        """
        Phase 3: Find candidates, hash them and group by hash.

        Returns:
            0 for success, 1 if the directory cannot be traversed
        """
        self.logger.info(
            f"Detecting duplicates in {self.args.directory} with method {self.hash_method.value}"
        )
        try:
            self.result = find_duplicates(
                self.args.directory,
                self.hash_method,
                recursive=not self.args.no_recursive,
                max_workers=self.workers,
                show_progress=self.show_progress,
                logger=self.logger,
            )
        except TraversalError as e:
            self.logger.error(str(e))
            return 1
        return 0

    def _report_phase(self) -> int:
        """
        Phase 4: Print the report and export it if requested.

        Returns:
            0 for success, 1 if the export file cannot be written
        """
        print_duplicate_report(self.result)

        if self.args.export:
            try:
                export_results(
                    sorted_groups(self.result),
                    self.args.export,
                    self.args.export_format,
                )
            except OSError as e:
                self.logger.error(f"Cannot write export file {self.args.export}: {e}")
                return 1
            self.logger.info(f"Results exported to: {self.args.export}")

        return 0


__all__ = ['CLIOrchestrator', 'setup_logging']
