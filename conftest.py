"""
Shared pytest fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))


SAMPLE_FILES = {
    "test1.txt": "Hello from test file one.\n",
    "test2.txt": "Second file\nwith two lines\n",
    "test3.txt": "Ünïcödé third file ✓\n",
}


@pytest.fixture
def sample_tree(tmp_path, monkeypatch):
    """
    Create ``test/test_files/test{1,2,3}.txt`` plus a non-matching file and
    make the temporary directory the working directory.
    """
    files_dir = tmp_path / "test" / "test_files"
    files_dir.mkdir(parents=True)
    for name, text in SAMPLE_FILES.items():
        (files_dir / name).write_bytes(text.encode("utf-8"))
    (files_dir / "notes.md").write_text("# not a txt file\n", encoding="utf-8")

    monkeypatch.chdir(tmp_path)
    return tmp_path
