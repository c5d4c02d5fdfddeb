"""
Core duplicate detection engine: enumerator, size grouper, hasher and resolver.

This package contains the performance-critical foundation of dupl:
- PathEnumeratorImpl: recursive traversal of one or more roots with extension filters
- SizeGrouperImpl: exact-size buckets; singletons are dropped before any hashing
- HasherImpl + ContentHasherImpl: full-content digests (SHA-256 default, MD5, xxHash64, ...)
  computed on a bounded thread pool
- DuplicateResolverImpl: digest groups of 2+ files become duplicate sets
- Models: FileRecord, DigestGroup, ScanReport and ScanParams

All components are pure Python with no UI dependencies.
"""

from .scanner import PathEnumeratorImpl
from .grouper import SizeGrouperImpl
from .hasher import (
    HasherImpl, ContentHasherImpl, HashlibAlgorithmImpl, XXHashAlgorithmImpl,
    FileChangedError, get_algorithm)
from .resolver import DuplicateResolverImpl
from .models import (
    FileRecord, SizeBuckets, DigestGroup, ScanStats, ScanReport, ScanParams,
    ReportFormat, Stage, HASH_ALGORITHM_CHOICES)

__all__ = [
    "PathEnumeratorImpl",
    "SizeGrouperImpl",
    "HasherImpl",
    "ContentHasherImpl",
    "HashlibAlgorithmImpl",
    "XXHashAlgorithmImpl",
    "FileChangedError",
    "get_algorithm",
    "DuplicateResolverImpl",
    "FileRecord",
    "SizeBuckets",
    "DigestGroup",
    "ScanStats",
    "ScanReport",
    "ScanParams",
    "ReportFormat",
    "Stage",
    "HASH_ALGORITHM_CHOICES",
]
