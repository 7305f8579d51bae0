"""Path-keyword classification.

Classes are recognised by case-insensitive substring containment.  The
priority order lives in :data:`CLASS_PRIORITY`; the first keyword found in a
path wins, so ``"gun_and_knife/x.xml"`` is a gun.

The numeric label ids in :data:`CLASS_INDEX` are an external contract of the
normalized label files and intentionally do not follow the priority order.
"""

from __future__ import annotations

GUN = "gun"
KNIFE = "knife"
WRENCH = "wrench"
FORK = "fork"
SCREWDRIVER = "screwdriver"
UNKNOWN = "unknown"

ALL_CLASSES: tuple[str, ...] = (GUN, KNIFE, WRENCH, FORK, SCREWDRIVER, UNKNOWN)

# (keyword, class) pairs, highest priority first
CLASS_PRIORITY: tuple[tuple[str, str], ...] = (
    ("gun", GUN),
    ("knife", KNIFE),
    ("wrench", WRENCH),
    ("fork", FORK),
    ("screwdriver", SCREWDRIVER),
)

CLASS_INDEX: dict[str, int] = {
    KNIFE: 0,
    FORK: 1,
    GUN: 2,
    WRENCH: 3,
    SCREWDRIVER: 4,
}

NO_INDEX = -1


def classify(path: str) -> str:
    """Return the class whose keyword appears first in priority order."""
    lowered = str(path).lower()
    for keyword, cls in CLASS_PRIORITY:
        if keyword in lowered:
            return cls
    return UNKNOWN


def index_for_class(cls: str) -> int:
    return CLASS_INDEX.get(cls, NO_INDEX)


def index_of(path: str) -> int:
    """Return the label id for *path*, or ``-1`` when no keyword matches."""
    return index_for_class(classify(path))


def classify_with_fallback(annotation_path: str, recorded_path: str) -> str:
    """Classify by the annotation's own path, then by the image path it records."""
    cls = classify(annotation_path)
    if cls == UNKNOWN:
        cls = classify(recorded_path)
    return cls
