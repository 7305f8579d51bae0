"""Shared fixtures: on-disk annotation files and small datasets."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from dataset_sorter.utils.config import SortRuntimeConfig

ANNOTATION_TEMPLATE = """<annotation>
\t<folder>{folder}</folder>
\t<filename>{filename}</filename>
\t<path>{path}</path>
\t<source>
\t\t<database>Unknown</database>
\t</source>
\t<size>
\t\t<width>{width}</width>
\t\t<height>{height}</height>
\t\t<depth>3</depth>
\t</size>
\t<segmented>0</segmented>
\t<object>
\t\t<name>{name}</name>
\t\t<pose>Unspecified</pose>
\t\t<truncated>0</truncated>
\t\t<difficult>0</difficult>
\t\t<bndbox>
\t\t\t<xmin>{xmin}</xmin>
\t\t\t<ymin>{ymin}</ymin>
\t\t\t<xmax>{xmax}</xmax>
\t\t\t<ymax>{ymax}</ymax>
\t\t</bndbox>
\t</object>
</annotation>
"""


def annotation_xml(
    path: str,
    *,
    folder: str = "images",
    name: str = "object",
    width: int | str = 100,
    height: int | str = 50,
    box: tuple[int, int, int, int] = (10, 10, 50, 30),
) -> str:
    xmin, ymin, xmax, ymax = box
    filename = path.replace("\\", "/").rsplit("/", 1)[-1]
    return ANNOTATION_TEMPLATE.format(
        folder=folder,
        filename=filename,
        path=path,
        width=width,
        height=height,
        name=name,
        xmin=xmin,
        ymin=ymin,
        xmax=xmax,
        ymax=ymax,
    )


@pytest.fixture
def write_annotation() -> Callable[..., Path]:
    """Write an annotation file; keyword arguments go to :func:`annotation_xml`."""

    def _write(target: Path, recorded_path: str, **kwargs) -> Path:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(annotation_xml(recorded_path, **kwargs), encoding="utf-8")
        return target

    return _write


@pytest.fixture
def write_image() -> Callable[[Path], Path]:
    def _write(target: Path, payload: bytes = b"\xff\xd8\xff\xe0fake-jpeg") -> Path:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
        return target

    return _write


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., SortRuntimeConfig]:
    """Runtime config pointing at ``tmp_path/dataset`` and ``tmp_path/output``."""

    def _make(**overrides) -> SortRuntimeConfig:
        values = {
            "dataset_root": str(tmp_path / "dataset"),
            "output_root": str(tmp_path / "output"),
            "images_dir": "images",
            "fallback_images_dir": "allimages",
            "annotation_ext": ".xml",
            "mode": "voc",
            "on_unreadable": "skip",
            "progress": False,
        }
        values.update(overrides)
        return SortRuntimeConfig(**values)

    return _make
