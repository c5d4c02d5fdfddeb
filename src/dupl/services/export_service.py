"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/export_service.py
Writes the redundant-file list of a scan to a timestamped text file:
UTF-8, one absolute path per line, no header. File names that are not valid
UTF-8 are written as their original bytes.
"""
import os
import time
import logging
from pathlib import Path
from typing import Optional

from dupl.core.models import ScanReport
from dupl.services.duplicate_service import DuplicateService

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "duplicates_"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class ExportService:

    @staticmethod
    def artifact_name(timestamp: float, attempt: int = 0) -> str:
        stamp = time.strftime(TIMESTAMP_FORMAT, time.localtime(timestamp))
        suffix = f"_{attempt}" if attempt else ""
        return f"{EXPORT_PREFIX}{stamp}{suffix}.txt"

    @classmethod
    def export_redundant_paths(
            cls,
            report: ScanReport,
            directory: str = ".",
            timestamp: Optional[float] = None
    ) -> Optional[Path]:
        """
        Write the redundant paths of `report` into `directory`.

        Returns:
            Path of the written file, or None if there was nothing to write or the
            write failed (the failure is logged as a warning).
        """
        paths = DuplicateService.redundant_paths(list(report.duplicate_sets))
        if not paths:
            logger.debug("No redundant files, export skipped")
            return None

        timestamp = time.time() if timestamp is None else timestamp
        target = None
        try:
            # Never overwrite an earlier export made within the same second
            for attempt in range(1000):
                target = Path(directory) / cls.artifact_name(timestamp, attempt)
                try:
                    with open(target, "x", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
                        for path in paths:
                            f.write(f"{path}\n")
                    return target.resolve()
                except FileExistsError:
                    continue
            logger.warning(f"Failed to write duplicates list: no free file name in '{directory}'.")
            return None
        except (OSError, UnicodeEncodeError) as e:
            logger.warning(f"Failed to write duplicates list to '{target}': {e}")
            cls._remove_partial(target)
            return None

    @staticmethod
    def _remove_partial(target: Optional[Path]) -> None:
        if target is None:
            return
        try:
            if target.exists():
                os.remove(target)
        except OSError as e:
            logger.warning(f"Could not remove incomplete export '{target}': {e}")
