"""
Unit tests for data models and ScanParams validation.
"""
import pytest
from dupl.core.models import (
    FileRecord, DigestGroup, ScanStats, ScanParams, normalize_extensions, HASH_ALGORITHM_CHOICES
)


class TestScanParams:

    def test_defaults_to_current_directory_when_no_roots(self):
        params = ScanParams()
        assert params.roots == ["."]
        assert params.algorithm == "sha256"
        assert params.workers >= 1
        assert params.export is False

    def test_supplied_roots_are_kept_as_given(self):
        params = ScanParams(roots=["/does/not/exist"])
        assert params.roots == ["/does/not/exist"]

    def test_extensions_are_normalized_but_keep_case(self):
        params = ScanParams(extensions=[".jpg", "PNG", "mov.", "", " ", "jpg"])
        assert params.extensions == ["jpg", "PNG", "mov"]

    def test_rejects_invalid_worker_count(self):
        with pytest.raises(ValueError, match="Worker count"):
            ScanParams(workers=0)

    def test_rejects_unknown_algorithm(self):
        with pytest.raises(ValueError, match="Unknown hash algorithm"):
            ScanParams(algorithm="crc32")

    def test_algorithm_name_is_case_insensitive(self):
        assert ScanParams(algorithm="SHA256").algorithm == "sha256"

    def test_rejects_empty_root(self):
        with pytest.raises(ValueError, match="Root directory cannot be empty"):
            ScanParams(roots=["", "/tmp"])

    def test_all_algorithm_choices_accepted(self):
        for name in HASH_ALGORITHM_CHOICES:
            assert ScanParams(algorithm=name).algorithm == name


def test_normalize_extensions_strips_single_dots():
    assert normalize_extensions([".tar.gz"]) == ["tar.gz"]
    assert normalize_extensions(["."]) == []


class TestFileRecord:

    def test_rejects_negative_size(self):
        with pytest.raises(ValueError):
            FileRecord(path="/a", size=-1)

    def test_rejects_non_bytes_digest(self):
        with pytest.raises(ValueError, match="digest"):
            FileRecord(path="/a", size=1, digest="abc")

    def test_name_is_basename(self):
        assert FileRecord(path="/x/y/photo.jpg", size=3).name == "photo.jpg"


class TestDigestGroup:

    def test_kept_and_redundant_split(self):
        group = DigestGroup(size=10, digest=b"d")
        for path in ("/a", "/b", "/c"):
            group.add_file(FileRecord(path=path, size=10, digest=b"d"))

        assert group.is_duplicate()
        assert group.kept.path == "/a"
        assert [f.path for f in group.redundant] == ["/b", "/c"]
        assert group.redundant_count == 2
        assert group.redundant_bytes == 20
        assert group.hex_digest == "64"

    def test_single_file_group_is_not_duplicate(self):
        group = DigestGroup(size=10, digest=b"d", files=[FileRecord(path="/a", size=10, digest=b"d")])
        assert not group.is_duplicate()
        assert group.redundant_count == 0
        assert group.redundant_bytes == 0

    def test_rejects_file_with_other_size(self):
        group = DigestGroup(size=10, digest=b"d")
        with pytest.raises(ValueError, match="different size"):
            group.add_file(FileRecord(path="/a", size=11, digest=b"d"))

    def test_rejects_file_with_other_digest(self):
        group = DigestGroup(size=10, digest=b"d")
        with pytest.raises(ValueError, match="different digest"):
            group.add_file(FileRecord(path="/a", size=10, digest=b"e"))


class TestScanStats:

    def test_update_stage_accumulates(self):
        stats = ScanStats()
        stats.update_stage("Size grouping", 2, 10, 0.5)
        stats.update_stage("Size grouping", 1, 5, 0.25)

        data = stats.stage_stats["Size grouping"]
        assert data["groups"] == 3
        assert data["files"] == 15
        assert data["time"] == pytest.approx(0.75)

    def test_print_summary_lists_stages(self):
        stats = ScanStats()
        stats.total_time = 1.5
        stats.update_stage("Content hashing", 4, 8, 1.0)
        summary = stats.print_summary()
        assert "Total Execution Time: 1.500s" in summary
        assert "Content hashing: 4 / 8 / 1.000s" in summary
