"""Pascal-VOC style annotation records.

One file describes one image and exactly one object.  Files carrying several
``<object>`` blocks are accepted, but only the first block is read and
written back.

Leaf values are kept as the text found in the file; the numeric helpers in
:mod:`dataset_sorter.core.writers` convert the geometry fields when
arithmetic is needed.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field, fields
from pathlib import Path

from dataset_sorter.core.errors import AnnotationDecodeError

ROOT_TAG = "annotation"

# Character references the serializer may emit for embedded control
# characters; downstream readers expect them removed.
_CONTROL_REFS = ("&#xA;", "&#xa;", "&#10;", "&#x9;", "&#9;")


@dataclass(slots=True)
class BoundingBox:
    xmin: str = ""
    ymin: str = ""
    xmax: str = ""
    ymax: str = ""


@dataclass(slots=True)
class ObjectEntry:
    name: str = ""
    pose: str = ""
    truncated: str = ""
    difficult: str = ""
    bndbox: BoundingBox = field(default_factory=BoundingBox)


@dataclass(slots=True)
class AnnotationRecord:
    """In-memory form of one annotation file."""

    folder: str = ""
    filename: str = ""
    path: str = ""
    database: str = ""
    width: str = ""
    height: str = ""
    depth: str = ""
    segmented: str = ""
    object: ObjectEntry = field(default_factory=ObjectEntry)

    def is_empty(self) -> bool:
        """True when decoding produced no value at all."""
        for item in (self, self.object, self.object.bndbox):
            for spec in fields(item):
                value = getattr(item, spec.name)
                if isinstance(value, str) and value:
                    return False
        return True


def _text(parent: ET.Element | None, tag: str) -> str:
    if parent is None:
        return ""
    return (parent.findtext(tag) or "").strip()


def parse_annotation(path: str | Path) -> AnnotationRecord:
    """Decode one annotation file.

    Raises:
        OSError:               the file cannot be opened or read.
        AnnotationDecodeError: the content is not well-formed markup or the
                               root element is not ``<annotation>``.
    """
    with open(path, "rb") as fh:
        payload = fh.read()

    try:
        root = ET.fromstring(payload)
    except ET.ParseError as err:
        raise AnnotationDecodeError(str(path), str(err)) from err

    if root.tag != ROOT_TAG:
        raise AnnotationDecodeError(str(path), f"root element is <{root.tag}>, expected <{ROOT_TAG}>")

    size = root.find("size")
    obj = root.find("object")
    box = obj.find("bndbox") if obj is not None else None

    return AnnotationRecord(
        folder=_text(root, "folder"),
        filename=_text(root, "filename"),
        path=_text(root, "path"),
        database=_text(root.find("source"), "database"),
        width=_text(size, "width"),
        height=_text(size, "height"),
        depth=_text(size, "depth"),
        segmented=_text(root, "segmented"),
        object=ObjectEntry(
            name=_text(obj, "name"),
            pose=_text(obj, "pose"),
            truncated=_text(obj, "truncated"),
            difficult=_text(obj, "difficult"),
            bndbox=BoundingBox(
                xmin=_text(box, "xmin"),
                ymin=_text(box, "ymin"),
                xmax=_text(box, "xmax"),
                ymax=_text(box, "ymax"),
            ),
        ),
    )


def _leaf(parent: ET.Element, tag: str, value: str) -> None:
    ET.SubElement(parent, tag).text = value


def _to_element(record: AnnotationRecord) -> ET.Element:
    root = ET.Element(ROOT_TAG)
    _leaf(root, "folder", record.folder)
    _leaf(root, "filename", record.filename)
    _leaf(root, "path", record.path)

    source = ET.SubElement(root, "source")
    _leaf(source, "database", record.database)

    size = ET.SubElement(root, "size")
    _leaf(size, "width", record.width)
    _leaf(size, "height", record.height)
    _leaf(size, "depth", record.depth)

    _leaf(root, "segmented", record.segmented)

    obj = ET.SubElement(root, "object")
    _leaf(obj, "name", record.object.name)
    _leaf(obj, "pose", record.object.pose)
    _leaf(obj, "truncated", record.object.truncated)
    _leaf(obj, "difficult", record.object.difficult)

    box = ET.SubElement(obj, "bndbox")
    _leaf(box, "xmin", record.object.bndbox.xmin)
    _leaf(box, "ymin", record.object.bndbox.ymin)
    _leaf(box, "xmax", record.object.bndbox.xmax)
    _leaf(box, "ymax", record.object.bndbox.ymax)
    return root


def strip_control_refs(text: str) -> str:
    for ref in _CONTROL_REFS:
        text = text.replace(ref, "")
    return text


def serialize_annotation(record: AnnotationRecord) -> str:
    """Render *record* as indented markup (two spaces, no XML declaration)."""
    root = _to_element(record)
    ET.indent(root, space="  ")
    rendered = ET.tostring(root, encoding="unicode", short_empty_elements=False)
    return strip_control_refs(rendered)
