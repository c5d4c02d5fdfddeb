"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Turns digested size buckets into duplicate sets.

Within each size bucket files are grouped by digest; any digest shared by two or
more files is a duplicate set. Members are ordered by path, so the kept file is
the lexicographically smallest path and results do not depend on the order in
which files were enumerated or hashed.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

from dupl.core.interfaces import DuplicateResolver
from dupl.core.models import DigestGroup, FileRecord, SizeBuckets


class DuplicateResolverImpl(DuplicateResolver):

    def resolve(self, buckets: SizeBuckets) -> List[DigestGroup]:
        groups = []
        for size, files in buckets.items():
            for digest, members in self._group_by(files, lambda f: f.digest).items():
                if len(members) < 2:
                    continue
                group = DigestGroup(size=size, digest=digest)
                for member in sorted(members, key=lambda f: f.path):
                    group.add_file(member)
                groups.append(group)

        # Largest savings first, then by kept path
        groups.sort(key=lambda g: (-g.size, g.kept.path))
        logger.debug(f"Resolved {len(groups)} duplicate sets")
        return groups

    @staticmethod
    def totals(groups: List[DigestGroup]) -> Tuple[int, int]:
        """(redundant file count, redundant byte count) over all duplicate sets."""
        count = sum(g.redundant_count for g in groups)
        size = sum(g.redundant_bytes for g in groups)
        return count, size

    @staticmethod
    def _group_by(files: List[FileRecord], key_func: Callable[[FileRecord], Any]) -> Dict[Any, List[FileRecord]]:
        """
        Group files by any computed key, keeping insertion order.
        Files whose key is None are left out.
        """
        groups = defaultdict(list)
        for file in files:
            key = key_func(file)
            if key is not None:
                groups[key].append(file)
        return groups
