"""Runtime configuration dataclass for a sort run.

Every field reads its default from ``config.yaml`` / ``SORTER_*`` environment
variables at construction time.  Override individual fields when
constructing from code (e.g. in tests or from CLI flags).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dataset_sorter.utils.sorter_config import cfg

MODE_VOC = "voc"
MODE_YOLO = "yolo"
MODES = (MODE_VOC, MODE_YOLO)

ON_UNREADABLE_SKIP = "skip"
ON_UNREADABLE_ABORT = "abort"
ON_UNREADABLE_POLICIES = (ON_UNREADABLE_SKIP, ON_UNREADABLE_ABORT)


@dataclass(slots=True)
class SortRuntimeConfig:
    """Dataset layout, output location and run behaviour.

    NOTE: All fields use ``default_factory`` so that configuration is read at
    **instantiation** time, not at import time.  This keeps
    ``monkeypatch.setenv`` in tests effective.
    """

    dataset_root: str = field(default_factory=lambda: cfg.get_str("run.dataset_root", "dataset"))
    output_root: str = field(default_factory=lambda: cfg.get_str("run.output_root", "output"))
    images_dir: str = field(default_factory=lambda: cfg.get_str("run.images_dir", "images"))
    fallback_images_dir: str = field(default_factory=lambda: cfg.get_str("run.fallback_images_dir", "allimages"))
    annotation_ext: str = field(default_factory=lambda: cfg.get_str("run.annotation_ext", ".xml"))
    mode: str = field(default_factory=lambda: cfg.get_str("run.mode", MODE_YOLO).strip().lower())
    on_unreadable: str = field(default_factory=lambda: cfg.get_str("run.on_unreadable", ON_UNREADABLE_SKIP).strip().lower())
    progress: bool = field(default_factory=lambda: cfg.get_bool("run.progress", True))

    @property
    def primary_image_root(self) -> Path:
        return Path(self.dataset_root) / self.images_dir

    @property
    def fallback_image_root(self) -> Path:
        return Path(self.dataset_root) / self.fallback_images_dir

    def validate(self) -> None:
        """Raise ``ValueError`` when the mode or unreadable policy is unknown."""
        if self.mode not in MODES:
            raise ValueError(f"unknown mode {self.mode!r}, expected one of {', '.join(MODES)}")
        if self.on_unreadable not in ON_UNREADABLE_POLICIES:
            raise ValueError(
                f"unknown on_unreadable policy {self.on_unreadable!r}, "
                f"expected one of {', '.join(ON_UNREADABLE_POLICIES)}"
            )
        if not self.annotation_ext.startswith("."):
            raise ValueError(f"annotation_ext must start with '.', got {self.annotation_ext!r}")
