"""Centralized filesystem paths for bundled assets."""

from __future__ import annotations

from pathlib import Path


PACKAGE_ROOT = Path(__file__).resolve().parent
PLUGINS_DIR = PACKAGE_ROOT / "plugins"
PLUGIN_PACKAGE = "passpersist.plugins"
