"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for a single duplicate scan: file records, size buckets, digest groups,
the final immutable report and the validated scan configuration.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Tuple, Union


# =============================
# Enums
# =============================

class Stage(str, Enum):
    SIZE = "Size grouping"
    HASH = "Content hashing"
    RESOLVE = "Duplicate resolution"

    @classmethod
    def get_all(cls):
        return [cls.SIZE, cls.HASH, cls.RESOLVE]


class ReportFormat(Enum):
    TEXT = "text"
    KEY_VALUE = "kv"

    @property
    def display_name(self) -> str:
        """Human-readable name for help output."""
        mapping = {
            ReportFormat.TEXT: "Text",
            ReportFormat.KEY_VALUE: "Key-value",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

@dataclass
class FileRecord:
    """
    A single regular file found during enumeration.
    `path` and `size` are set by the size grouper, `digest` by the content hasher.
    """
    path: str
    size: int  # in bytes
    digest: Optional[bytes] = None

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.path}")
        if self.digest is not None and not isinstance(self.digest, bytes):
            raise ValueError("Field 'digest' must be bytes or None")

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


# size -> files of exactly that size, in enumeration order
SizeBuckets = Dict[int, List[FileRecord]]


@dataclass
class DigestGroup:
    """
    Files sharing one size and one content digest.
    A group with two or more files is a duplicate set: files[0] is kept, the rest are redundant.
    """
    size: int
    digest: bytes
    files: List[FileRecord] = field(default_factory=list)

    def add_file(self, file: FileRecord) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a group.")
        if file.digest != self.digest:
            raise ValueError("Cannot add file with different digest to a group.")
        self.files.append(file)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return len(self.files) >= 2

    @property
    def kept(self) -> FileRecord:
        return self.files[0]

    @property
    def redundant(self) -> List[FileRecord]:
        return self.files[1:]

    @property
    def redundant_count(self) -> int:
        return max(len(self.files) - 1, 0)

    @property
    def redundant_bytes(self) -> int:
        return self.size * self.redundant_count

    @property
    def hex_digest(self) -> str:
        return self.digest.hex()

    def __repr__(self):
        return f"<DigestGroup size={self.size}, count={len(self.files)}>"


class ScanStats:
    """
    Per-stage statistics collected while a scan runs.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        lines = [
            "Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            "",
            "Stage: GROUPS / FILES / TIME"
        ]
        for stage, data in self.stage_stats.items():
            lines.append(f"{stage}: {data['groups']} / {data['files']} / {data['time']:.3f}s")
        return "\n".join(lines)


@dataclass(frozen=True)
class ScanReport:
    """
    Aggregate result of one scan, built once by the scan command.
    Only the top-level fields are frozen: the DigestGroup/FileRecord objects in
    duplicate_sets and the ScanStats in stats are plain mutable objects that
    consumers must treat as read-only.
    """
    roots: Tuple[str, ...]
    extensions: Tuple[str, ...]
    algorithm: str
    files_counted: int
    bytes_counted: int
    duplicate_file_count: int
    duplicate_byte_count: int
    duplicate_sets: Tuple[DigestGroup, ...]
    started_at: float
    finished_at: float
    elapsed: float
    cancelled: bool = False
    stats: Optional[ScanStats] = field(default=None, compare=False, repr=False)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicate_sets)


# =============================
# Scan configuration
# =============================

DEFAULT_ALGORITHM = "sha256"
HASH_ALGORITHM_CHOICES = ("sha256", "md5", "sha1", "blake2b", "xxhash")


def default_workers() -> int:
    return os.cpu_count() or 1


def normalize_extensions(extensions: List[str]) -> List[str]:
    """
    Strip one leading and one trailing dot from each extension and drop empties.
    Case is preserved: extension matching is case-sensitive.
    """
    normalized = []
    for ext in extensions:
        ext = ext.strip()
        if ext.startswith("."):
            ext = ext[1:]
        if ext.endswith("."):
            ext = ext[:-1]
        if ext and ext not in normalized:
            normalized.append(ext)
    return normalized


@dataclass
class ScanParams:
    """Parameters for one scan with built-in validation. Interface-agnostic."""
    roots: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=list)
    algorithm: str = DEFAULT_ALGORITHM
    workers: int = field(default_factory=default_workers)
    strict_roots: bool = False
    export: bool = False
    export_dir: str = "."

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        # No roots at all means "scan the current directory"; supplied but invalid
        # roots never fall back to it.
        if not self.roots:
            self.roots = ["."]

        if any(not root for root in self.roots):
            raise ValueError("Root directory cannot be empty")

        if self.workers < 1:
            raise ValueError("Worker count must be at least 1")

        if not self.algorithm:
            raise ValueError("Hash algorithm cannot be empty")
        self.algorithm = self.algorithm.strip().lower()
        if self.algorithm not in HASH_ALGORITHM_CHOICES:
            raise ValueError(
                f"Unknown hash algorithm: '{self.algorithm}'. "
                f"Valid options: {', '.join(HASH_ALGORITHM_CHOICES)}"
            )

        if self.export and not self.export_dir:
            raise ValueError("Export directory cannot be empty")

        self.extensions = normalize_extensions(self.extensions)
