from __future__ import annotations

import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

os.environ.setdefault("SMART_SEARCH_DIRECTORY", str(ROOT / "directory.yaml"))
