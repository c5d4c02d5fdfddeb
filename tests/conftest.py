"""
Shared fixtures for duplicate scanner tests.
Creates isolated temporary directories with controlled test files.
"""
import logging
import pytest
import tempfile
import threading
from pathlib import Path
from typing import Dict, List

from dupl.core.hasher import HasherImpl, get_algorithm
from dupl.core.models import FileRecord


@pytest.fixture(autouse=True)
def reset_dupl_logger():
    """CLI runs set the package logger level; restore it so caplog sees warnings."""
    yield
    logging.getLogger("dupl").setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files:
    - 3 identical 1KB .txt files (one of them in a subdirectory)
    - 2 identical 2KB .txt files
    - 2 .txt files of equal size (1500B) but different content
    - 1 .txt file with a unique size (2500B)
    - 2 identical .jpg files (300B) and 2 identical .png files (400B)
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["same_size_x"] = temp_dir / "same_size_x.txt"
    files["same_size_y"] = temp_dir / "same_size_y.txt"
    files["same_size_x"].write_bytes(b"C" * 1500)
    files["same_size_y"].write_bytes(b"D" * 1500)

    files["unique"] = temp_dir / "unique.txt"
    files["unique"].write_bytes(b"E" * 2500)

    files["photo1"] = temp_dir / "photo1.jpg"
    files["photo2"] = temp_dir / "photo2.jpg"
    files["photo1"].write_bytes(b"JPG" * 100)
    files["photo2"].write_bytes(b"JPG" * 100)

    files["image1"] = temp_dir / "image1.png"
    files["image2"] = temp_dir / "image2.png"
    files["image1"].write_bytes(b"PNG!" * 100)
    files["image2"].write_bytes(b"PNG!" * 100)

    return files


class CountingHasher:
    """Test double: delegates to a real hasher and records every hashed path."""

    def __init__(self, algorithm: str = "sha256"):
        self.inner = HasherImpl(get_algorithm(algorithm))
        self.hashed_paths: List[str] = []
        self._lock = threading.Lock()

    def compute_digest(self, file: FileRecord) -> bytes:
        with self._lock:
            self.hashed_paths.append(file.path)
        return self.inner.compute_digest(file)


@pytest.fixture
def counting_hasher() -> CountingHasher:
    return CountingHasher()
