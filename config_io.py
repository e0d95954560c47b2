from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional


def _config_error(path: Path, detail: str) -> SystemExit:
    return SystemExit(f"\nERROR: Cannot use config {path}\n{detail}\n")


def load_json_config(path: Path) -> Dict[str, Any]:
    """Read the JSON settings file shared by the game and the map generator.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        SystemExit: If the file is not valid JSON or its root is not an object.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise _config_error(path, f"Invalid JSON at line {e.lineno}, col {e.colno}: {e.msg}")
    if not isinstance(data, dict):
        raise _config_error(
            path, 'The root must be an object with "generator", "game" and "colors" sections.'
        )
    return data


def load_optional_config(path: Optional[Path]) -> Dict[str, Any]:
    """``None`` means no config file: every section falls back to its defaults."""
    if path is None:
        return {}
    return load_json_config(path)
