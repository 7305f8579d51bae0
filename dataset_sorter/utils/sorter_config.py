"""Sorter Config — centralised loader for ``config.yaml``.

Reads ``config.yaml`` from the project root and exposes its values through
dotted keys.  ``SORTER_*`` environment variables **always win** over the
YAML file, which is only the friendly fallback.

Usage::

    from dataset_sorter.utils.sorter_config import cfg

    print(cfg.get_str("run.mode"))            # "yolo"
    print(cfg.get_bool("run.progress"))       # True

Equivalent environment variable: ``SORTER_RUN_MODE``
  → the YAML key ``run.mode`` becomes ``SORTER_RUN_MODE``.

Loading is lazy (first access) and thread-safe.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any

import yaml

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _find_config_path() -> Path:
    """Resolve the config.yaml location, walking up from this module."""
    env_path = os.getenv("SORTER_CONFIG_FILE", "").strip()
    if env_path:
        return Path(env_path)

    start = Path(__file__).resolve().parent
    for ancestor in [start, start.parent, start.parent.parent]:
        candidate = ancestor / "config.yaml"
        if candidate.exists():
            return candidate

    return start.parent / "config.yaml"


class SorterConfig:
    """Configuration access with env > yaml > default priority.

    Attributes:
        _data:   Raw dictionary loaded from YAML.
        _loaded: Whether the YAML file has been read yet.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._loaded: bool = False
        self._lock = threading.Lock()

    # ── Lazy loading ──────────────────────────────────────────────

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            self._load()
            self._loaded = True

    def _load(self) -> None:
        """Read and parse config.yaml.

        A missing file means "no overrides".  A file that exists but is not
        valid YAML is a configuration mistake and propagates ``yaml.YAMLError``.
        """
        config_path = _find_config_path()
        if not config_path.exists():
            self._data = {}
            return
        with open(config_path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        self._data = raw if isinstance(raw, dict) else {}

    def reload(self) -> None:
        """Force a re-read of the file (tests switch config files this way)."""
        with self._lock:
            self._loaded = False
            self._load()
            self._loaded = True

    # ── Dotted-key access ─────────────────────────────────────────

    def _resolve(self, dotted_key: str) -> Any:
        """Resolve ``run.mode`` → data[sorter][mode]."""
        self._ensure_loaded()
        node: Any = self._data
        for part in dotted_key.split("."):
            if isinstance(node, dict):
                node = node.get(part)
            else:
                return None
        return node

    @staticmethod
    def _env_key(dotted_key: str) -> str:
        """Convert ``run.mode`` → ``SORTER_RUN_MODE``."""
        return "SORTER_" + dotted_key.upper().replace(".", "_")

    # ── Typed getters ─────────────────────────────────────────────

    def get_str(self, key: str, default: str = "") -> str:
        env_val = os.getenv(self._env_key(key), "").strip()
        if env_val:
            return env_val
        yaml_val = self._resolve(key)
        if yaml_val is not None:
            return str(yaml_val)
        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        env_val = os.getenv(self._env_key(key), "").strip().lower()
        if env_val in _TRUE_VALUES:
            return True
        if env_val in _FALSE_VALUES:
            return False
        yaml_val = self._resolve(key)
        if isinstance(yaml_val, bool):
            return yaml_val
        if yaml_val is not None:
            raw = str(yaml_val).strip().lower()
            if raw in _TRUE_VALUES:
                return True
            if raw in _FALSE_VALUES:
                return False
        return default

    def __repr__(self) -> str:
        self._ensure_loaded()
        return f"<SorterConfig sections={list(self._data.keys())}>"


# ── Global singleton ─────────────────────────────────────────────
cfg = SorterConfig()
