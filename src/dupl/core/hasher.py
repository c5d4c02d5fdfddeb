"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements full-content file hashing with pluggable hash algorithms.

HasherImpl streams a file through any HashAlgorithm in fixed-size chunks.
ContentHasherImpl is the pipeline stage: it digests every file of every retained
size bucket on a bounded thread pool. A file that vanished, shrank, grew or became
unreadable since it was sized is an ordinary per-file failure: it is logged and
left out, the scan goes on.
"""

import os
import stat
import hashlib
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Optional, Callable

import xxhash

logger = logging.getLogger(__name__)

from dupl.core.models import FileRecord, SizeBuckets, Stage, HASH_ALGORITHM_CHOICES
from dupl.core.interfaces import Hasher, HashAlgorithm, ContentHasher

CHUNK_SIZE = 1024 * 1024


class FileChangedError(OSError):
    """The file no longer matches what the size grouper recorded."""


# Use the same way to implement and use any other hashing algorithm
class HashlibAlgorithmImpl(HashAlgorithm):
    def __init__(self, name: str):
        self.name = name
        # Fail early on names this interpreter's hashlib does not provide
        self.new()

    def new(self):
        if self.name == "md5":
            return hashlib.new(self.name, usedforsecurity=False)
        return hashlib.new(self.name)


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxhash"

    def new(self):
        return xxhash.xxh64()


def get_algorithm(name: str) -> HashAlgorithm:
    """Build the hash algorithm registered under `name`."""
    name = name.strip().lower()
    if name not in HASH_ALGORITHM_CHOICES:
        raise ValueError(
            f"Unknown hash algorithm: '{name}'. "
            f"Valid options: {', '.join(HASH_ALGORITHM_CHOICES)}"
        )
    if name == "xxhash":
        return XXHashAlgorithmImpl()
    return HashlibAlgorithmImpl(name)


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Counts every digest attempt in `files_hashed`.
    """

    def __init__(self, algorithm: Optional[HashAlgorithm] = None, chunk_size: int = CHUNK_SIZE):
        self.algorithm = algorithm or get_algorithm("sha256")
        self.chunk_size = chunk_size
        self.files_hashed = 0
        self._lock = threading.Lock()

    def compute_digest(self, file: FileRecord) -> bytes:
        """
        Digest the complete contents of `file`.

        Raises:
            OSError: the file cannot be opened or read
            FileChangedError: the file is gone, not regular, or its size changed
        """
        with self._lock:
            self.files_hashed += 1

        self._revalidate(file)

        state = self.algorithm.new()
        bytes_read = 0
        with open(file.path, 'rb') as f:
            for chunk in iter(lambda: f.read(self.chunk_size), b""):
                state.update(chunk)
                bytes_read += len(chunk)

        if bytes_read != file.size:
            raise FileChangedError(
                f"size changed while reading ({file.size} bytes expected, {bytes_read} read)"
            )
        return state.digest()

    @staticmethod
    def _revalidate(file: FileRecord) -> None:
        try:
            st = os.stat(file.path)
        except FileNotFoundError:
            raise FileChangedError("file disappeared before hashing") from None
        if not stat.S_ISREG(st.st_mode):
            raise FileChangedError("no longer a regular file")
        if st.st_size != file.size:
            raise FileChangedError(f"size changed from {file.size} to {st.st_size} bytes")
        if not os.access(file.path, os.R_OK):
            raise FileChangedError("file became unreadable before hashing")


class ContentHasherImpl(ContentHasher):
    """
    Digests all files of the given size buckets on a pool of `workers` threads.
    Each FileRecord is handed to exactly one worker; its digest is stored by the
    collecting thread once that worker is done with it.
    """

    def __init__(self, hasher: Optional[Hasher] = None, workers: int = 1):
        self.hasher = hasher or HasherImpl()
        self.workers = max(1, workers)

    def process(
        self,
        buckets: SizeBuckets,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> SizeBuckets:
        work = [file for files in buckets.values() for file in files]
        total_files = len(work)
        processed_files = 0
        failed_files = 0

        def digest_one(file: FileRecord):
            if stopped_flag and stopped_flag():
                return file, None
            try:
                return file, self.hasher.compute_digest(file)
            except OSError as e:
                logger.warning(f"Could not compute hash for '{file.path}': {e}. Skipping.")
                return file, None

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(digest_one, file) for file in work]
            for future in as_completed(futures):
                file, digest = future.result()
                file.digest = digest
                if digest is None:
                    failed_files += 1
                processed_files += 1
                if progress_callback:
                    progress_callback(Stage.HASH.value, processed_files, total_files)

        if failed_files:
            logger.debug(f"{failed_files} of {total_files} files were not hashed")

        return self._digested_only(buckets)

    @staticmethod
    def _digested_only(buckets: SizeBuckets) -> SizeBuckets:
        result: Dict[int, list] = {}
        for size, files in buckets.items():
            digested = [f for f in files if f.digest is not None]
            if len(digested) >= 2:
                result[size] = digested
        return result
