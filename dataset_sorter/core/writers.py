"""Output strategies for annotated images.

Two interchangeable writers, picked once per run by :func:`build_writer`:

``voc`` (:class:`VocRewriteWriter`)
    Copies the image to ``<output>/<class>/<class>_<n><ext>`` and writes the
    annotation, with its path, filename and object name rewritten, next to
    it under the same ``n``.

``yolo`` (:class:`YoloBoxWriter`)
    Copies the image to ``<output>/yolo/<n>.jpg`` and writes one normalized
    label line to ``<output>/yolo/<n>.txt``.  ``n`` is a single counter shared
    by all classes.

Counters only move after every file of a pair has been written.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from dataset_sorter.core.annotation import AnnotationRecord, serialize_annotation
from dataset_sorter.core.classifier import NO_INDEX, index_for_class
from dataset_sorter.core.context import RunContext
from dataset_sorter.core.errors import GeometryError
from dataset_sorter.core.naming import OutputNamer
from dataset_sorter.utils.config import MODE_VOC, MODE_YOLO
from dataset_sorter.utils.logger import SorterLogger

_log = SorterLogger("Writer")

YOLO_IMAGE_EXT = ".jpg"
YOLO_LABEL_EXT = ".txt"


class AnnotationWriter(Protocol):
    mode: str

    def write(
        self,
        annotation_path: Path,
        record: AnnotationRecord,
        image_path: Path,
        cls: str,
        context: RunContext,
    ) -> Path:
        """Emit one image/annotation pair and return the annotation output path."""
        ...


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


# ── Mode A: rewritten annotation ────────────────────────────────────────────

def relative_image_path(annotation_out: Path, image_out: Path) -> str:
    """Path stored in a rewritten annotation, relative to the annotation's folder.

    Both files in the same folder gives just the image name.
    """
    rel_dir = os.path.relpath(image_out.parent, start=annotation_out.parent)
    return os.path.normpath(os.path.join(rel_dir, image_out.name))


class VocRewriteWriter:
    mode = MODE_VOC

    def __init__(self, namer: OutputNamer) -> None:
        self.namer = namer

    def write(
        self,
        annotation_path: Path,
        record: AnnotationRecord,
        image_path: Path,
        cls: str,
        context: RunContext,
    ) -> Path:
        n = context.counter(cls)
        image_out = self.namer.name_for(cls, n, image_path.suffix)
        annotation_out = self.namer.name_for(cls, n, annotation_path.suffix)

        record.path = relative_image_path(annotation_out, image_out)
        record.filename = image_out.name
        record.object.name = cls

        annotation_out.write_text(serialize_annotation(record), encoding="utf-8")
        try:
            context.copy_image(image_path, image_out)
        except OSError:
            _remove_quietly(annotation_out)
            raise

        context.advance(cls)
        _log.status(f"{annotation_path.name} -> {annotation_out.name} + {image_out.name}")
        return annotation_out


# ── Mode B: normalized boxes ────────────────────────────────────────────────

def _to_int(source: str, field_name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise GeometryError(source, field_name, value) from None


def record_geometry(record: AnnotationRecord, source: str = "") -> tuple[int, int, int, int, int, int]:
    """Return ``(width, height, xmin, ymin, xmax, ymax)`` as integers.

    Raises:
        GeometryError: a field is not an integer, or the image size is zero.
    """
    box = record.object.bndbox
    width = _to_int(source, "width", record.width)
    height = _to_int(source, "height", record.height)
    xmin = _to_int(source, "xmin", box.xmin)
    ymin = _to_int(source, "ymin", box.ymin)
    xmax = _to_int(source, "xmax", box.xmax)
    ymax = _to_int(source, "ymax", box.ymax)
    if width == 0:
        raise GeometryError(source, "width", record.width)
    if height == 0:
        raise GeometryError(source, "height", record.height)
    return width, height, xmin, ymin, xmax, ymax


def normalize_box(
    width: int, height: int, xmin: int, ymin: int, xmax: int, ymax: int
) -> tuple[float, float, float, float]:
    """Corner box in pixels → ``(cx, cy, w, h)`` relative to the image size.

    The centre is shifted by one pixel towards the origin before scaling;
    existing label sets were produced with this offset.
    """
    dw = 1.0 / width
    dh = 1.0 / height
    cx = (xmin + xmax) / 2.0 - 1
    cy = (ymin + ymax) / 2.0 - 1
    w = xmax - xmin
    h = ymax - ymin
    return cx * dw, cy * dh, w * dw, h * dh


def format_label_line(class_index: int, box: tuple[float, float, float, float]) -> str:
    cx, cy, w, h = box
    return f"{class_index} {cx:.6f} {cy:.6f} {w:.6f} {h:.6f}"


class YoloBoxWriter:
    mode = MODE_YOLO

    def __init__(self, namer: OutputNamer) -> None:
        self.namer = namer

    def write(
        self,
        annotation_path: Path,
        record: AnnotationRecord,
        image_path: Path,
        cls: str,
        context: RunContext,
    ) -> Path:
        width, height, xmin, ymin, xmax, ymax = record_geometry(record, str(annotation_path))
        class_index = index_for_class(cls)
        if class_index == NO_INDEX:
            _log.warn(f"{annotation_path}: no class keyword matched, writing label id {NO_INDEX}")

        line = format_label_line(class_index, normalize_box(width, height, xmin, ymin, xmax, ymax))

        n = context.global_counter
        image_out = self.namer.yolo_name_for(n, YOLO_IMAGE_EXT)
        label_out = self.namer.yolo_name_for(n, YOLO_LABEL_EXT)

        label_out.write_text(line, encoding="utf-8")
        try:
            context.copy_image(image_path, image_out)
        except OSError:
            _remove_quietly(label_out)
            raise

        context.advance_global()
        _log.status(f"{annotation_path.name} -> {label_out.name} [{class_index}]")
        return label_out


def build_writer(mode: str, namer: OutputNamer) -> AnnotationWriter:
    """Pick the output strategy for a run."""
    if mode == MODE_VOC:
        return VocRewriteWriter(namer)
    if mode == MODE_YOLO:
        return YoloBoxWriter(namer)
    raise ValueError(f"unknown mode {mode!r}")
