"""Sort pipeline: annotation sweep followed by the unlabelled-image sweep.

Pipeline per annotation file::

    parse → (unreadable? skip or abort) → classify (own path, then recorded
    image path) → resolve image → writer strategy

Afterwards every file under the primary image root that no annotation
claimed is copied to ``<output>/<class>/<class>_<n><ext>``, whatever the
writer mode was.

Classification looks at paths relative to the dataset root, so the
location of the dataset on disk never influences the class.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from tqdm import tqdm

from dataset_sorter.core.annotation import parse_annotation
from dataset_sorter.core.classifier import UNKNOWN, classify, classify_with_fallback
from dataset_sorter.core.context import RunContext
from dataset_sorter.core.errors import AnnotationDecodeError, UnreadableAnnotationError
from dataset_sorter.core.naming import OutputNamer
from dataset_sorter.core.report import SortReport
from dataset_sorter.core.resolver import ImageResolver
from dataset_sorter.core.writers import AnnotationWriter, build_writer
from dataset_sorter.utils.config import ON_UNREADABLE_ABORT, SortRuntimeConfig
from dataset_sorter.utils.logger import SorterLogger

_log = SorterLogger("Pipeline")


def walk_files(root: Path) -> Iterator[Path]:
    """Yield regular files under *root* in lexical, depth-first order."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_file():
                yield path


class DatasetSorter:
    """Runs one sort over ``config.dataset_root`` into ``config.output_root``.

    Args:
        config:  Run configuration; validated on construction.
        writer:  Output strategy.  Built from ``config.mode`` when omitted.
        context: Counters and dedup state.  A fresh one when omitted.
    """

    def __init__(
        self,
        config: SortRuntimeConfig,
        writer: AnnotationWriter | None = None,
        context: RunContext | None = None,
    ) -> None:
        config.validate()
        self.config = config
        self.namer = OutputNamer(config.output_root)
        self.writer = writer if writer is not None else build_writer(config.mode, self.namer)
        self.context = context if context is not None else RunContext()
        self.resolver = ImageResolver(config.primary_image_root, config.fallback_image_root)
        self.dataset_root = Path(config.dataset_root)
        self.report = SortReport(mode=self.writer.mode)

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.dataset_root).as_posix()
        except ValueError:
            return path.as_posix()

    def run(self) -> SortReport:
        if not self.dataset_root.is_dir():
            raise FileNotFoundError(f"dataset root not found: {self.dataset_root}")

        _log.highlight(f"Sorting {self.dataset_root} -> {self.config.output_root} (mode={self.writer.mode})")
        self.sweep_annotations()
        self.sweep_unlabelled()
        _log.success(
            f"{self.report.annotations_written} annotated + {self.report.images_swept} unlabelled images written"
        )
        return self.report

    # ── Annotation sweep ──────────────────────────────────────────

    def sweep_annotations(self) -> None:
        ext = self.config.annotation_ext
        annotations = [path for path in walk_files(self.dataset_root) if path.suffix == ext]
        _log.info(f"{len(annotations)} annotation files found")

        for path in tqdm(annotations, desc="Annotations", unit="file", disable=not self.config.progress):
            self.process_annotation(path)

    def _unreadable(self, path: Path, cause: Exception | None = None) -> None:
        if self.config.on_unreadable == ON_UNREADABLE_ABORT:
            raise UnreadableAnnotationError(str(path)) from cause
        reason = f": {cause}" if cause is not None else ""
        _log.warn(f"Skipping unreadable annotation {path}{reason}")
        self.report.skipped_unreadable += 1
        self.report.unreadable_files.append(str(path))

    def process_annotation(self, path: Path) -> Path | None:
        """Handle one annotation file; return the written annotation/label path."""
        self.report.annotations_seen += 1

        try:
            record = parse_annotation(path)
        except AnnotationDecodeError as err:
            self._unreadable(path, err)
            return None
        if record.is_empty():
            self._unreadable(path)
            return None

        cls = classify_with_fallback(self._relative(path), record.path)

        image = self.resolver.resolve(record.path)
        if image is None:
            _log.status(f"No image for {path.name} ({record.path or 'empty path'}), skipped")
            self.report.skipped_unresolved += 1
            self.report.unresolved_files.append(str(path))
            return None

        written = self.writer.write(path, record, image, cls, self.context)
        self.report.annotations_written += 1
        self.report.class_distribution[cls] += 1
        if cls == UNKNOWN:
            self.report.unknown_class += 1
        return written

    # ── Unlabelled sweep ──────────────────────────────────────────

    def sweep_unlabelled(self) -> None:
        root = self.config.primary_image_root
        if not root.is_dir():
            _log.warn(f"Image root {root} not found, no unlabelled images to copy")
            return

        pending = [path for path in walk_files(root) if not self.context.was_copied(path)]
        _log.info(f"{len(pending)} unlabelled images in {root}")

        for path in tqdm(pending, desc="Unlabelled", unit="img", disable=not self.config.progress):
            self.copy_unlabelled(path)

    def copy_unlabelled(self, path: Path) -> Path:
        cls = classify(self._relative(path))
        target = self.namer.name_for(cls, self.context.counter(cls), path.suffix)
        self.context.copy_image(path, target)
        self.context.advance(cls)
        self.report.images_swept += 1
        self.report.class_distribution[cls] += 1
        return target
