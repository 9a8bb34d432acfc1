"""Configuration paths and report defaults for HeapGraph."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("HEAPGRAPH_HOME", str(Path.home() / ".heapgraph"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

DEFAULT_ROWS = 10
DEFAULT_PRETTY = False
