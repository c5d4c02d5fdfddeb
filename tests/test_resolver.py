"""
Unit tests for DuplicateResolverImpl.
"""
from dupl.core.models import FileRecord
from dupl.core.resolver import DuplicateResolverImpl


def _rec(path, size, digest):
    return FileRecord(path=path, size=size, digest=digest)


class TestDuplicateResolverImpl:

    def test_same_digest_forms_duplicate_set(self):
        buckets = {12: [_rec("/a.txt", 12, b"h1"), _rec("/b.txt", 12, b"h1")]}
        groups = DuplicateResolverImpl().resolve(buckets)

        assert len(groups) == 1
        assert groups[0].size == 12
        assert groups[0].digest == b"h1"
        assert [f.path for f in groups[0].files] == ["/a.txt", "/b.txt"]

    def test_same_size_different_digest_is_not_duplicate(self):
        buckets = {12: [_rec("/a.txt", 12, b"h1"), _rec("/b.txt", 12, b"h2")]}
        assert DuplicateResolverImpl().resolve(buckets) == []

    def test_kept_file_is_smallest_path_regardless_of_insertion_order(self):
        buckets = {5: [_rec("/z/c", 5, b"h"), _rec("/a/b", 5, b"h"), _rec("/m/a", 5, b"h")]}
        group = DuplicateResolverImpl().resolve(buckets)[0]

        assert group.kept.path == "/a/b"
        assert [f.path for f in group.redundant] == ["/m/a", "/z/c"]

    def test_splits_bucket_into_several_sets(self):
        buckets = {3: [
            _rec("/a1", 3, b"A"), _rec("/b1", 3, b"B"), _rec("/a2", 3, b"A"),
            _rec("/b2", 3, b"B"), _rec("/c1", 3, b"C"),
        ]}
        groups = DuplicateResolverImpl().resolve(buckets)

        assert sorted(tuple(f.path for f in g.files) for g in groups) == [("/a1", "/a2"), ("/b1", "/b2")]

    def test_sets_ordered_by_size_descending(self):
        buckets = {
            1: [_rec("/s1", 1, b"x"), _rec("/s2", 1, b"x")],
            100: [_rec("/l1", 100, b"y"), _rec("/l2", 100, b"y")],
        }
        groups = DuplicateResolverImpl().resolve(buckets)
        assert [g.size for g in groups] == [100, 1]

    def test_undigested_files_are_ignored(self):
        buckets = {4: [_rec("/a", 4, None), _rec("/b", 4, None)]}
        assert DuplicateResolverImpl().resolve(buckets) == []

    def test_totals(self):
        buckets = {
            10: [_rec("/a", 10, b"x"), _rec("/b", 10, b"x"), _rec("/c", 10, b"x")],
            7: [_rec("/d", 7, b"y"), _rec("/e", 7, b"y")],
        }
        resolver = DuplicateResolverImpl()
        groups = resolver.resolve(buckets)

        assert resolver.totals(groups) == (3, 27)
        assert resolver.totals([]) == (0, 0)
