"""Tests for scriptor.io module."""

from __future__ import annotations

from pathlib import Path

from scriptor.io import clean_outputs, relocate, remove_file


class TestCleanOutputs:
    def test_removes_only_wav_and_txt(self, tmp_path: Path) -> None:
        for name in ("a.wav", "b c.txt", "video.mp4", "notes.md", "model.bin"):
            (tmp_path / name).write_bytes(b"x")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "keep.txt").write_text("keep")

        removed = clean_outputs(tmp_path)

        assert [p.name for p in removed] == ["a.wav", "b c.txt"]
        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "model.bin",
            "notes.md",
            "sub",
            "video.mp4",
        ]
        assert (tmp_path / "sub" / "keep.txt").exists()

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert clean_outputs(tmp_path / "missing") == []

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert clean_outputs(tmp_path) == []


class TestRelocate:
    def test_moves_file(self, tmp_path: Path) -> None:
        src = tmp_path / "files" / "talk.txt"
        src.parent.mkdir()
        src.write_text("hello")
        dest = tmp_path / "videos" / "talk.txt"

        assert relocate(src, dest) == dest
        assert dest.read_text() == "hello"
        assert not src.exists()

    def test_overwrites_destination(self, tmp_path: Path) -> None:
        src = tmp_path / "new.txt"
        src.write_text("new")
        dest = tmp_path / "old.txt"
        dest.write_text("old")

        relocate(src, dest)

        assert dest.read_text() == "new"


class TestRemoveFile:
    def test_removes_existing(self, tmp_path: Path) -> None:
        path = tmp_path / "a.wav"
        path.write_bytes(b"x")
        assert remove_file(path) is True
        assert not path.exists()

    def test_missing_is_noop(self, tmp_path: Path) -> None:
        assert remove_file(tmp_path / "missing.wav") is False
