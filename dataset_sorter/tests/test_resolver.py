"""Tests for core.resolver: base-name lookup with fallback root."""

from __future__ import annotations

from pathlib import Path

from dataset_sorter.core.resolver import ImageResolver, find_file, recorded_basename


class TestRecordedBasename:
    def test_windows_path(self) -> None:
        assert recorded_basename(r"C:\Users\me\data\knife\img_7.jpg") == "img_7.jpg"

    def test_posix_path(self) -> None:
        assert recorded_basename("/data/gun/a.png") == "a.png"

    def test_bare_name(self) -> None:
        assert recorded_basename("a.png") == "a.png"

    def test_empty(self) -> None:
        assert recorded_basename("") == ""


class TestImageResolver:
    def test_primary_root(self, tmp_path: Path, write_image) -> None:
        image = write_image(tmp_path / "images" / "knife" / "a.jpg")
        resolver = ImageResolver(tmp_path / "images", tmp_path / "allimages")
        assert resolver.resolve(r"D:\capture\a.jpg") == image

    def test_fallback_only_when_primary_misses(self, tmp_path: Path, write_image) -> None:
        primary = write_image(tmp_path / "images" / "a.jpg")
        write_image(tmp_path / "allimages" / "a.jpg")
        fallback = write_image(tmp_path / "allimages" / "deep" / "b.jpg")
        resolver = ImageResolver(tmp_path / "images", tmp_path / "allimages")

        assert resolver.resolve("a.jpg") == primary
        assert resolver.resolve("x/y/b.jpg") == fallback

    def test_exact_name_match(self, tmp_path: Path, write_image) -> None:
        write_image(tmp_path / "images" / "a.jpeg")
        write_image(tmp_path / "images" / "A.jpg")
        resolver = ImageResolver(tmp_path / "images", tmp_path / "allimages")
        assert resolver.resolve("a.jpg") is None

    def test_not_found(self, tmp_path: Path) -> None:
        resolver = ImageResolver(tmp_path / "images", tmp_path / "allimages")
        assert resolver.resolve("missing.jpg") is None
        assert resolver.resolve("") is None

    def test_directories_are_not_matches(self, tmp_path: Path) -> None:
        (tmp_path / "images" / "a.jpg").mkdir(parents=True)
        assert find_file(tmp_path / "images", "a.jpg") is None
