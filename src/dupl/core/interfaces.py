"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate scanner.
These protocols keep the pipeline stages swappable: tests plug in a counting
or failing hasher without touching the rest of the pipeline.

Key Components:
---------------
- HashAlgorithm: Streaming digest factory (SHA-256, MD5, xxHash64, ...).
- Hasher: Computes the full-content digest of one file.
- PathEnumerator: Lazily yields candidate file paths under the scanned roots.
- SizeGrouper: Buckets paths by exact byte size.
- ContentHasher: Digests every file of every retained size bucket.
- DuplicateResolver: Splits size buckets into duplicate sets by digest.
"""

from typing import Protocol, Iterable, Iterator, List, Optional, Callable, Tuple
from dupl.core.models import FileRecord, DigestGroup, SizeBuckets

ProgressCallback = Callable[[str, int, Optional[int]], None]
StoppedFlag = Callable[[], bool]


class HashState(Protocol):
    """Incremental hash object, as returned by hashlib.new() or xxhash.xxh64()."""
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for streaming hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the pipeline.
    """
    name: str

    def new(self) -> HashState:
        """Returns a fresh incremental hash object."""
        ...


class Hasher(Protocol):
    """Interface for hashing the full contents of a file."""
    def compute_digest(self, file: FileRecord) -> bytes: ...


class PathEnumerator(Protocol):
    def enumerate(self, stopped_flag: Optional[StoppedFlag] = None) -> Iterator[str]:
        """Yield absolute paths of regular files under the configured roots."""
        ...


class SizeGrouper(Protocol):
    def group(
        self,
        paths: Iterable[str],
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[SizeBuckets, int, int]:
        """
        Group paths by size.

        Returns:
            (buckets with 2+ files, files counted, bytes counted)
        """
        ...


class ContentHasher(Protocol):
    def process(
        self,
        buckets: SizeBuckets,
        stopped_flag: Optional[StoppedFlag] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> SizeBuckets:
        """Digest every file in every bucket; returns buckets holding only digested files."""
        ...


class DuplicateResolver(Protocol):
    def resolve(self, buckets: SizeBuckets) -> List[DigestGroup]:
        """Return duplicate sets (2+ files with equal size and digest)."""
        ...
