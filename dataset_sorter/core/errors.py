"""Error types raised by the sort pipeline.

I/O problems are not wrapped: ``OSError`` propagates as-is and ends the run.
"""

from __future__ import annotations


class SorterError(Exception):
    """Base class for dataset sorter failures."""


class AnnotationDecodeError(SorterError):
    """The annotation file exists but is not well-formed markup."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot decode annotation {path}: {reason}")
        self.path = path
        self.reason = reason


class UnreadableAnnotationError(SorterError):
    """The annotation could not be turned into a usable record."""

    def __init__(self, path: str) -> None:
        super().__init__(f"cannot read annotation: {path}")
        self.path = path


class GeometryError(SorterError):
    """A size or bounding-box field is not a usable integer."""

    def __init__(self, path: str, field_name: str, value: str) -> None:
        super().__init__(f"{path}: invalid {field_name} value {value!r}")
        self.path = path
        self.field_name = field_name
        self.value = value
