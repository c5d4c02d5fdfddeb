"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups enumerated paths by exact byte size.
Only sizes shared by two or more files can hold duplicates, so every other
bucket is dropped here and never reaches the (expensive) hashing stage.
"""

import os
import stat
import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, Optional, Callable, Tuple

logger = logging.getLogger(__name__)

from dupl.core.interfaces import SizeGrouper
from dupl.core.models import FileRecord, SizeBuckets, Stage

PROGRESS_INTERVAL = 500


class SizeGrouperImpl(SizeGrouper):
    """
    Looks up the size of every path and buckets the files by size.
    With workers > 1 the stat calls run on a thread pool; results are consumed in
    enumeration order, so the buckets are identical to a sequential run.
    """

    def __init__(self, workers: int = 1):
        self.workers = max(1, workers)

    def group(
        self,
        paths: Iterable[str],
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[SizeBuckets, int, int]:
        buckets = defaultdict(list)
        files_counted = 0
        bytes_counted = 0

        for path, size in self._sizes(paths, stopped_flag):
            if size is None:
                continue
            files_counted += 1
            bytes_counted += size
            buckets[size].append(FileRecord(path=path, size=size))

            if progress_callback and files_counted % PROGRESS_INTERVAL == 0:
                progress_callback(Stage.SIZE.value, files_counted, None)

        if progress_callback:
            progress_callback(Stage.SIZE.value, files_counted, files_counted)

        logger.debug(f"Sized {files_counted} files ({bytes_counted} bytes) into {len(buckets)} buckets")
        return self.drop_singletons(buckets), files_counted, bytes_counted

    def _sizes(
        self,
        paths: Iterable[str],
        stopped_flag: Optional[Callable[[], bool]]
    ) -> Iterator[Tuple[str, Optional[int]]]:
        def lookup(path: str) -> Tuple[str, Optional[int]]:
            if stopped_flag and stopped_flag():
                return path, None
            return path, self.get_size(path)

        if self.workers == 1:
            for path in paths:
                if stopped_flag and stopped_flag():
                    return
                yield lookup(path)
            return

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            yield from executor.map(lookup, paths)

    @staticmethod
    def get_size(path: str) -> Optional[int]:
        """Size of a regular file in bytes, or None (with a warning) if it cannot be determined."""
        try:
            st = os.stat(path)
        except OSError as e:
            logger.warning(f"Could not get size for '{path}': {e}. Skipping.")
            return None
        if not stat.S_ISREG(st.st_mode):
            logger.warning(f"'{path}' is no longer a regular file. Skipping.")
            return None
        return st.st_size

    @staticmethod
    def drop_singletons(buckets: SizeBuckets) -> SizeBuckets:
        """Keep only buckets with 2+ files, ordered by size."""
        return {
            size: files
            for size, files in sorted(buckets.items())
            if len(files) >= 2
        }
