from __future__ import annotations

import os
from pathlib import Path

from winrepair.repositories.media_repository import MediaLocator


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


def _candidates(tmp_path: Path) -> list[Path]:
    return [tmp_path / "first", tmp_path / "second", tmp_path / "third"]


def test_returns_none_when_no_candidate_dir_exists(tmp_path: Path):
    locator = MediaLocator(candidate_dirs=_candidates(tmp_path), image_extension=".wim")

    assert locator.find_image() is None


def test_returns_none_when_dirs_have_no_image(tmp_path: Path):
    dirs = _candidates(tmp_path)
    _touch(dirs[0] / "readme.txt")
    _touch(dirs[1] / "sub" / "boot.sdi")

    assert MediaLocator(candidate_dirs=dirs).find_image() is None


def test_finds_single_image_in_second_dir_deterministically(tmp_path: Path):
    dirs = _candidates(tmp_path)
    dirs[0].mkdir()
    image = _touch(dirs[1] / "x64" / "sources" / "install.wim")

    locator = MediaLocator(candidate_dirs=dirs, image_extension=".wim")

    results = {locator.find_image() for _ in range(5)}
    assert results == {image}


def test_earlier_directory_wins(tmp_path: Path):
    dirs = _candidates(tmp_path)
    first = _touch(dirs[0] / "install.wim")
    _touch(dirs[2] / "install.wim")

    assert MediaLocator(candidate_dirs=dirs).find_image() == first


def test_extension_match_is_case_insensitive(tmp_path: Path):
    dirs = _candidates(tmp_path)
    image = _touch(dirs[0] / "INSTALL.WIM")

    assert MediaLocator(candidate_dirs=dirs, image_extension=".wim").find_image() == image


def test_candidate_that_is_a_file_is_skipped(tmp_path: Path):
    dirs = _candidates(tmp_path)
    _touch(dirs[0])     # a file, not a directory
    image = _touch(dirs[1] / "install.wim")

    assert MediaLocator(candidate_dirs=dirs).find_image() == image


def test_unsearchable_candidate_dir_is_skipped(tmp_path: Path, monkeypatch):
    dirs = _candidates(tmp_path)
    _touch(dirs[0] / "install.wim")
    image = _touch(dirs[1] / "install.wim")

    real_is_dir = Path.is_dir

    def is_dir(self, **kwargs):
        if self == dirs[0]:
            raise PermissionError(13, "Access is denied", str(self))
        return real_is_dir(self, **kwargs)

    monkeypatch.setattr(Path, "is_dir", is_dir)

    assert MediaLocator(candidate_dirs=dirs).find_image() == image


def test_unreadable_subdirectory_is_skipped(tmp_path: Path, monkeypatch):
    dirs = _candidates(tmp_path)
    locked = dirs[0] / "a_locked"
    _touch(locked / "install.wim")
    image = _touch(dirs[0] / "b_open" / "install.wim")

    real_scandir = os.scandir

    def scandir(path="."):
        if os.fspath(path) == str(locked):
            raise PermissionError(13, "Access is denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    assert MediaLocator(candidate_dirs=dirs).find_image() == image
