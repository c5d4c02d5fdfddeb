"""
Unified command orchestrator for a duplicate scan.
This is the SINGLE source of truth for the scan workflow. The CLI (and any
wrapper script) only builds ScanParams and renders the returned ScanReport.
"""
import time
import logging
from typing import Optional, Callable

from dupl.core.models import ScanParams, ScanReport, ScanStats, Stage
from dupl.core.interfaces import Hasher
from dupl.core.scanner import PathEnumeratorImpl
from dupl.core.grouper import SizeGrouperImpl
from dupl.core.hasher import HasherImpl, ContentHasherImpl, get_algorithm
from dupl.core.resolver import DuplicateResolverImpl

logger = logging.getLogger(__name__)


class DuplicateScanCommand:
    """
    Orchestrates the entire scan:
    1. Enumerate candidate paths under the valid roots
    2. Group them by size, dropping sizes held by a single file
    3. Digest every file that shares its size with another one
    4. Resolve duplicate sets and build the ScanReport

    Usage:
        params = ScanParams(roots=["~/Pictures"], extensions=["jpg"])
        report = DuplicateScanCommand().execute(
            params,
            progress_callback=cli_progress_printer,
            stopped_flag=signal_handler_check
        )

    A hasher can be injected (e.g. a counting test double); otherwise one is built
    from params.algorithm.
    """

    def __init__(self, hasher: Optional[Hasher] = None):
        self._hasher = hasher

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> ScanReport:
        """
        Run one scan with the given parameters.

        Returns:
            The immutable ScanReport. If stopped_flag fired, the report covers only the
            work finished before that and has cancelled=True.

        Raises:
            ValueError: invalid root with params.strict_roots set, or unknown algorithm
        """
        hasher = self._hasher or HasherImpl(get_algorithm(params.algorithm))
        stats = ScanStats()
        started_at = time.time()
        total_start = time.perf_counter()

        enumerator = PathEnumeratorImpl(
            roots=params.roots,
            extensions=params.extensions,
            strict_roots=params.strict_roots
        )
        roots = enumerator.valid_roots()

        # Stage 1: enumeration is lazy, so it runs inside size grouping
        start = time.perf_counter()
        buckets, files_counted, bytes_counted = SizeGrouperImpl(params.workers).group(
            enumerator.enumerate(stopped_flag=stopped_flag),
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        stats.update_stage(
            Stage.SIZE.value, len(buckets), files_counted, time.perf_counter() - start)

        # Stage 2: hashing, only for files sharing their size with another file
        start = time.perf_counter()
        candidates = sum(len(files) for files in buckets.values())
        buckets = ContentHasherImpl(hasher, params.workers).process(
            buckets,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        stats.update_stage(
            Stage.HASH.value, len(buckets), candidates, time.perf_counter() - start)

        # Stage 3: digest groups
        start = time.perf_counter()
        resolver = DuplicateResolverImpl()
        groups = resolver.resolve(buckets)
        duplicate_count, duplicate_bytes = resolver.totals(groups)
        stats.update_stage(
            Stage.RESOLVE.value, len(groups), sum(len(g.files) for g in groups),
            time.perf_counter() - start)

        elapsed = time.perf_counter() - total_start
        stats.total_time = elapsed
        cancelled = bool(stopped_flag and stopped_flag())
        if cancelled:
            logger.warning("Scan interrupted; the report covers only files processed so far.")

        logger.info(
            f"Checked {files_counted} files, found {len(groups)} duplicate sets "
            f"({duplicate_count} redundant files) in {elapsed:.3f}s"
        )

        return ScanReport(
            roots=tuple(roots),
            extensions=tuple(params.extensions),
            algorithm=params.algorithm,
            files_counted=files_counted,
            bytes_counted=bytes_counted,
            duplicate_file_count=duplicate_count,
            duplicate_byte_count=duplicate_bytes,
            duplicate_sets=tuple(groups),
            started_at=started_at,
            finished_at=time.time(),
            elapsed=elapsed,
            cancelled=cancelled,
            stats=stats,
        )
