"""
dupl: duplicate file finder.

Core features:
- Recursive scan of one or more directories, optionally limited to file extensions
- Two-stage detection: exact size first, then a full-content digest (SHA-256 by default)
- Parallel hashing on a bounded thread pool
- Summary report with optional export of redundant paths (one per line)
- Read-only: files are never modified or deleted
"""
from pathlib import Path

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupl")
except PackageNotFoundError:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    try:
        with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        __version__ = "unknown"

# Public API: only what users should import directly
from dupl.commands import DuplicateScanCommand
from dupl.core import ScanParams, ScanReport, FileRecord, DigestGroup, ReportFormat
from dupl.services import DuplicateService, ReportBuilder, ExportService
from dupl.utils.convert_utils import ConvertUtils

__all__ = [
    "DuplicateScanCommand",
    "ScanParams",
    "ScanReport",
    "FileRecord",
    "DigestGroup",
    "ReportFormat",
    "DuplicateService",
    "ReportBuilder",
    "ExportService",
    "ConvertUtils",
    "__version__",
]
