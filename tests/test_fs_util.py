"""Tests for FSUtil helpers."""

from pathlib import Path

import pytest

from src.util.fs_util import FSUtil


class TestFindFilesByExtensions:
    """Tests for find_files_by_extensions."""

    def test_matches_any_extension_sorted(self, tmp_path: Path) -> None:
        for name in ("b.md", "a.markdown", "c.txt", "D.MD"):
            (tmp_path / name).write_text("x", encoding="utf-8")

        result = FSUtil.find_files_by_extensions(tmp_path, [".md", "markdown"], recursive=False)

        assert [p.name for p in result] == ["D.MD", "a.markdown", "b.md"]

    def test_recursive(self, tmp_path: Path) -> None:
        nested = tmp_path / "2023" / "03"
        nested.mkdir(parents=True)
        (nested / "deep.md").write_text("x", encoding="utf-8")
        (tmp_path / "top.md").write_text("x", encoding="utf-8")

        flat = FSUtil.find_files_by_extensions(tmp_path, [".md"], recursive=False)
        deep = FSUtil.find_files_by_extensions(tmp_path, [".md"], recursive=True)

        assert [p.name for p in flat] == ["top.md"]
        assert sorted(p.name for p in deep) == ["deep.md", "top.md"]

    def test_directories_are_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "folder.md").mkdir()

        assert FSUtil.find_files_by_extensions(tmp_path, [".md"], recursive=False) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Directory not found"):
            FSUtil.find_files_by_extensions(tmp_path / "missing", [".md"], recursive=False)

    def test_not_a_directory(self, tmp_path: Path) -> None:
        file_path = tmp_path / "file.md"
        file_path.write_text("x", encoding="utf-8")
        with pytest.raises(NotADirectoryError):
            FSUtil.find_files_by_extensions(file_path, [".md"], recursive=False)


class TestTextFiles:
    """Tests for reading and writing text files."""

    def test_write_and_read(self, tmp_path: Path) -> None:
        target = tmp_path / "sub" / "note.md"
        FSUtil.write_text_file(target, "héllo\n", create_parents=True)

        assert FSUtil.read_text_file(target) == "héllo\n"

    def test_write_without_parents_fails(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FSUtil.write_text_file(tmp_path / "missing" / "note.md", "x", create_parents=False)

    def test_read_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            FSUtil.read_text_file(tmp_path / "nope.md")

    def test_read_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Path is not a file"):
            FSUtil.read_text_file(tmp_path)


class TestEnsureDirectoryExists:
    """Tests for ensure_directory_exists."""

    def test_creates_nested_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "data" / "output"
        FSUtil.ensure_directory_exists(target)

        assert target.is_dir()

    def test_existing_directory_is_kept(self, tmp_path: Path) -> None:
        (tmp_path / "keep.md").write_text("x", encoding="utf-8")
        FSUtil.ensure_directory_exists(tmp_path)

        assert (tmp_path / "keep.md").exists()

    def test_file_in_the_way(self, tmp_path: Path) -> None:
        blocker = tmp_path / "output"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(NotADirectoryError):
            FSUtil.ensure_directory_exists(blocker)
