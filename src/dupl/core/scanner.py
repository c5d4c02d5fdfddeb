"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements path enumeration over one or more root directories.
Features:
- Validates roots up front; invalid roots are warned about and excluded
- Recursively walks directories in sorted order (deterministic enumeration)
- Yields absolute paths of regular, readable files only
- Applies case-sensitive extension filters
- Lazy: paths are produced one at a time, nothing is collected here
"""

import os
import stat
import logging
from typing import Iterator, List, Optional, Callable

logger = logging.getLogger(__name__)

from dupl.core.interfaces import PathEnumerator


class PathEnumeratorImpl(PathEnumerator):
    """
    Walks root directories and yields candidate file paths.

    Attributes:
        roots: Root directories to scan (relative paths are made absolute)
        extensions: Allowed extensions without leading dot (e.g., ["jpg", "png"]); empty = all
        strict_roots: Raise ValueError for an invalid root instead of skipping it
    """

    def __init__(
        self,
        roots: List[str],
        extensions: Optional[List[str]] = None,
        strict_roots: bool = False
    ):
        self.roots = list(roots) if roots else ["."]
        self.suffixes = tuple(f".{ext}" for ext in extensions) if extensions else ()
        self.strict_roots = strict_roots
        self._valid_roots: Optional[List[str]] = None

    def valid_roots(self) -> List[str]:
        """
        Absolute paths of the roots that can be traversed, in the given order.
        Duplicate roots are kept once. Computed (and warned about) only once.
        """
        if self._valid_roots is None:
            self._valid_roots = self._check_roots()
        return list(self._valid_roots)

    def _check_roots(self) -> List[str]:
        valid = []
        for root in self.roots:
            abs_root = os.path.abspath(root)
            problem = self._root_problem(abs_root)
            if problem:
                message = f"Skipping invalid or unreadable directory: {root} ({problem})"
                if self.strict_roots:
                    raise ValueError(f"Invalid root directory: {root} ({problem})")
                logger.warning(message)
                continue
            if abs_root not in valid:
                valid.append(abs_root)
        return valid

    @staticmethod
    def _root_problem(abs_root: str) -> Optional[str]:
        if not os.path.exists(abs_root):
            return "does not exist"
        if not os.path.isdir(abs_root):
            return "not a directory"
        if not os.access(abs_root, os.R_OK | os.X_OK):
            return "permission denied"
        return None

    def enumerate(self, stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[str]:
        """
        Yield absolute paths of matching regular files under every valid root.
        A path reachable from several overlapping roots is yielded once.
        """
        roots = self.valid_roots()
        logger.debug(f"Enumerating roots: {roots}, extensions: {list(self.suffixes)}")
        seen = set()

        for root in roots:
            for dirpath, dirs, files in os.walk(root, onerror=self._on_walk_error):
                if stopped_flag and stopped_flag():
                    logger.debug("Enumeration interrupted")
                    return

                # Prune symlinked directories before os.walk enters them
                dirs[:] = [d for d in sorted(dirs) if self._prefilter_dir(os.path.join(dirpath, d))]

                for filename in sorted(files):
                    if stopped_flag and stopped_flag():
                        return
                    if self.suffixes and not filename.endswith(self.suffixes):
                        continue
                    path = os.path.join(dirpath, filename)
                    if path in seen:
                        continue
                    seen.add(path)
                    if self._is_candidate(path):
                        yield path

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Could not list directory '{error.filename}': {error.strerror or error}. Skipping.")

    @staticmethod
    def _prefilter_dir(path: str) -> bool:
        """Directories reached through a symlink are not traversed."""
        if os.path.islink(path):
            logger.warning(f"Skipping symbolic link to directory: {path}")
            return False
        return True

    @staticmethod
    def _is_candidate(path: str) -> bool:
        """True if the path is a readable regular file (symlinks are never followed)."""
        try:
            st = os.lstat(path)
        except OSError as e:
            logger.warning(f"Could not inspect '{path}': {e}. Skipping.")
            return False

        if stat.S_ISLNK(st.st_mode):
            logger.warning(f"Skipping symbolic link: {path}")
            return False
        if not stat.S_ISREG(st.st_mode):
            logger.warning(f"Skipping non-regular file: {path}")
            return False
        if not os.access(path, os.R_OK):
            logger.warning(f"Skipping unreadable file: {path}")
            return False
        return True
