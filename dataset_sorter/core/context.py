"""Run-scoped mutable state: class counters, global counter, copied images.

A fresh :class:`RunContext` is created for every run, so two runs in the
same process never share counters.  Access is single-threaded.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from dataset_sorter.core.classifier import ALL_CLASSES


def image_key(path: str | Path) -> str:
    """Normalised key used for copied-image bookkeeping."""
    return os.path.normcase(os.path.abspath(path))


@dataclass(slots=True)
class RunContext:
    """Counters and dedup set shared by the writers and the pipeline.

    Attributes:
        class_counters: Next free number per class, all starting at 0.
        global_counter: Next free number for normalized-box output.
        copied_images:  Keys (see :func:`image_key`) of source images
                        already copied during this run.
    """

    class_counters: dict[str, int] = field(default_factory=lambda: {cls: 0 for cls in ALL_CLASSES})
    global_counter: int = 0
    copied_images: set[str] = field(default_factory=set)

    def counter(self, cls: str) -> int:
        return self.class_counters[cls]

    def advance(self, cls: str) -> None:
        self.class_counters[cls] += 1

    def advance_global(self) -> None:
        self.global_counter += 1

    def was_copied(self, path: str | Path) -> bool:
        return image_key(path) in self.copied_images

    def copy_image(self, src: str | Path, dst: str | Path) -> None:
        """Copy *src* to *dst* and remember *src* as copied.

        The source is only recorded once the copy has succeeded.
        """
        shutil.copyfile(src, dst)
        self.copied_images.add(image_key(src))
