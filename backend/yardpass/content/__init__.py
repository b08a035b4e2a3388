"""Bundled site content — the default CMS document."""

import copy
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CMS_FILE = Path(__file__).resolve().parent / "default_cms.yaml"


@lru_cache
def _load_default_cms() -> dict[str, Any]:
    with DEFAULT_CMS_FILE.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def default_cms() -> dict[str, Any]:
    """Return a fresh copy of the default CMS document."""
    return copy.deepcopy(_load_default_cms())
