"""Run summary for a sort: counts, class distribution, skipped files."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_MAX_LISTED = 50


@dataclass
class SortReport:
    mode: str = ""
    annotations_seen: int = 0
    annotations_written: int = 0
    skipped_unreadable: int = 0
    skipped_unresolved: int = 0
    unknown_class: int = 0
    images_swept: int = 0
    class_distribution: Counter = field(default_factory=Counter)
    unreadable_files: list[str] = field(default_factory=list)
    unresolved_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "annotations_seen": self.annotations_seen,
            "annotations_written": self.annotations_written,
            "skipped_unreadable": self.skipped_unreadable,
            "skipped_unresolved": self.skipped_unresolved,
            "unknown_class": self.unknown_class,
            "images_swept": self.images_swept,
            "class_distribution": dict(sorted(self.class_distribution.items(), key=lambda x: x[1], reverse=True)),
            "unreadable_files": self.unreadable_files[:_MAX_LISTED],
            "unresolved_files": self.unresolved_files[:_MAX_LISTED],
        }


def build_report_payload(report: SortReport) -> dict[str, Any]:
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        **report.to_dict(),
    }


def print_report(report: SortReport, as_json: bool = False) -> dict[str, Any]:
    """Print the summary and return the payload that was printed."""
    payload = build_report_payload(report)

    if as_json:
        print(json.dumps(payload, indent=2))
        return payload

    print("\n[SORT] === Summary ===")
    print(f"  Mode:              {report.mode}")
    print(f"  Annotations:       {report.annotations_seen}")
    print(f"  Written:           {report.annotations_written}")
    print(f"  Unreadable:        {report.skipped_unreadable}")
    print(f"  Image not found:   {report.skipped_unresolved}")
    print(f"  Unknown class:     {report.unknown_class}")
    print(f"  Unlabelled images: {report.images_swept}")

    if report.class_distribution:
        print("\n  Classes:")
        for name, count in report.class_distribution.most_common():
            print(f"    {name:12s}  {count:>6}")

    if report.unreadable_files:
        print(f"\n  Unreadable annotations ({min(10, len(report.unreadable_files))} first):")
        for path in report.unreadable_files[:10]:
            print(f"    {path}")

    return payload


def save_report(report: SortReport, path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(build_report_payload(report), indent=2), encoding="utf-8")
    return target
