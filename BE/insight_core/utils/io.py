# BE/insight_core/utils/io.py
"""
Lightweight file I/O helpers.
- YAML loader used by the config layer

No runtime dependency on the rest of the app.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml


def read_yaml(path: Path | str) -> Dict[str, Any]:
    """
    Load a YAML file into a dict. Returns {} if the file is missing.
    """
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if isinstance(data, dict):
            return data
        # allow top-level lists; wrap for callers expecting dict-like
        return {"_": data}
