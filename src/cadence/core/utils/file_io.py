"""
File I/O utilities: safe and atomic writes, JSON load/save.

All functions operate on explicit paths; there are no implicit directory lookups.
"""

from __future__ import annotations

import json
import os
import tempfile
from typing import Any

from loguru import logger

from ..exceptions import DataLoadError, FileIOError
from ..types import PathLike


def safe_write(filepath: PathLike, content: str, encoding: str = "utf-8") -> None:
    """Write content atomically, creating parent directories as needed.

    The content goes to a temp file in the same directory which then
    replaces the target, so readers never observe a half-written file.
    """
    filepath = os.fspath(filepath)
    directory = os.path.dirname(filepath) or "."
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".part")
        try:
            with os.fdopen(fd, "w", encoding=encoding) as f:
                f.write(content)
            os.replace(tmp_path, filepath)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    except OSError as e:
        raise FileIOError(f"Could not write {filepath}: {e}") from e


def read_json(filepath: PathLike, default: Any = None) -> Any:
    """Load JSON from *filepath*, returning *default* when the file is missing."""
    filepath = os.fspath(filepath)
    if not os.path.exists(filepath):
        logger.debug(f"{filepath} does not exist, using default")
        return default
    try:
        with open(filepath, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DataLoadError(f"{filepath} is not valid JSON: {e}") from e
    except OSError as e:
        raise DataLoadError(f"Could not read {filepath}: {e}") from e


def write_json(filepath: PathLike, data: Any, indent: int = 2) -> None:
    """Serialize *data* as UTF-8 JSON and write it atomically."""
    safe_write(filepath, json.dumps(data, indent=indent, ensure_ascii=False) + "\n")
