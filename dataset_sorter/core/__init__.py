from .context import RunContext
from .pipeline import DatasetSorter
from .report import SortReport
from .writers import VocRewriteWriter, YoloBoxWriter, build_writer

__all__ = ["DatasetSorter", "RunContext", "SortReport", "VocRewriteWriter", "YoloBoxWriter", "build_writer"]
