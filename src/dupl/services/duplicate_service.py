from typing import List
from dupl.core.models import DigestGroup


class DuplicateService:
    @staticmethod
    def redundant_paths(groups: List[DigestGroup]) -> List[str]:
        """
        Paths of every duplicate-set member except the kept one (the first file).

        Args:
            groups (List[DigestGroup]): Duplicate sets, in report order.

        Returns:
            List[str]: Redundant file paths, grouped by set, in set order.
        """
        redundant = []
        for group in groups:
            if group.is_duplicate():
                redundant.extend(file.path for file in group.redundant)
        return redundant
