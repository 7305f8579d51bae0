"""run_sorter.py — command-line entry point of Dataset Sorter.

Sorts an annotated detection dataset into a class-partitioned output tree:

  1. Loads the run configuration (``config.yaml`` < ``SORTER_*`` env < flags).
  2. Copies every annotated image and writes its annotation (``voc`` mode)
     or its normalized label line (``yolo`` mode).
  3. Copies the images no annotation referenced into per-class folders.
  4. Prints a summary and optionally saves it as JSON.

Usage::

    python -m dataset_sorter.run_sorter
    python -m dataset_sorter.run_sorter --mode voc --dataset data/raw --output data/sorted
    dataset-sorter --json --save-report reports/sort.json

Environment variables (optional, flags win)
-------------------------------------------
``SORTER_RUN_DATASET_ROOT``   Input tree (default ``dataset``).
``SORTER_RUN_OUTPUT_ROOT``    Output tree (default ``output``).
``SORTER_RUN_MODE``           ``voc`` or ``yolo`` (default ``yolo``).
``SORTER_RUN_ON_UNREADABLE``  ``skip`` or ``abort`` (default ``skip``).
``SORTER_CONFIG_FILE``        Alternative ``config.yaml``.
"""

from __future__ import annotations

import argparse
import sys

from dataset_sorter.core.errors import SorterError
from dataset_sorter.core.pipeline import DatasetSorter
from dataset_sorter.core.report import print_report, save_report
from dataset_sorter.utils.config import MODES, ON_UNREADABLE_POLICIES, SortRuntimeConfig
from dataset_sorter.utils.logger import SorterLogger

_log = SorterLogger("CLI")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sort an annotated detection dataset by class")
    parser.add_argument("--dataset", type=str, default="", help="Dataset root (default: config run.dataset_root)")
    parser.add_argument("--output", type=str, default="", help="Output root (default: config run.output_root)")
    parser.add_argument("--mode", choices=MODES, default=None, help="Annotation output mode")
    parser.add_argument(
        "--on-unreadable",
        choices=ON_UNREADABLE_POLICIES,
        default=None,
        dest="on_unreadable",
        help="Skip or abort on annotations that cannot be decoded",
    )
    parser.add_argument("--no-progress", action="store_true", dest="no_progress", help="Hide progress bars")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument("--save-report", type=str, default=None, dest="save_report", help="Save summary JSON to path")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SortRuntimeConfig:
    """Configuration defaults overridden by whichever flags were given."""
    config = SortRuntimeConfig()
    if args.dataset:
        config.dataset_root = args.dataset
    if args.output:
        config.output_root = args.output
    if args.mode:
        config.mode = args.mode
    if args.on_unreadable:
        config.on_unreadable = args.on_unreadable
    if args.no_progress:
        config.progress = False
    return config


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        config = build_config(args)
        report = DatasetSorter(config).run()
    except ValueError as err:
        _log.error(f"Invalid configuration: {err}")
        return 1
    except (SorterError, OSError) as err:
        _log.error(str(err))
        return 1

    print_report(report, as_json=args.json)
    if args.save_report:
        target = save_report(report, args.save_report)
        _log.info(f"Report saved: {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
