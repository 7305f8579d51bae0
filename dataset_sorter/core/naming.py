"""Deterministic output file names."""

from __future__ import annotations

from pathlib import Path

YOLO_DIR = "yolo"


class OutputNamer:
    """Builds output paths under *output_root*, creating class folders on demand."""

    def __init__(self, output_root: str | Path) -> None:
        self.output_root = Path(output_root)

    def class_dir(self, name: str) -> Path:
        directory = self.output_root / name
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def name_for(self, cls: str, counter: int, ext: str) -> Path:
        """``<output>/<cls>/<cls>_<counter><ext>``"""
        return self.class_dir(cls) / f"{cls}_{counter}{ext}"

    def yolo_name_for(self, counter: int, ext: str) -> Path:
        """``<output>/yolo/<counter><ext>``"""
        return self.class_dir(YOLO_DIR) / f"{counter}{ext}"
