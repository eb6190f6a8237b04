"""
Whole-file JSON read/write helpers for the input and output documents.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from json_translate.errors import InputError, OutputWriteError


def read_json(path: str | Path) -> Any:
    """
    Load any well-formed JSON document (object, array or scalar).

    Raises:
        InputError: if the file is missing, unreadable, not valid JSON, or nested
            deeper than the parser allows.
    """
    path = Path(path)
    if not path.is_file():
        raise InputError(f"Input file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in {path}: {exc}") from exc
    except RecursionError as exc:
        raise InputError(f"JSON in {path} is nested too deeply to parse") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Cannot read input file {path}: {exc}") from exc


def write_json(path: str | Path, value: Any) -> None:
    """
    Write `value` as pretty-printed UTF-8 JSON.

    The document is written to a temporary sibling and moved into place, so a
    failed write never leaves a truncated output file behind.

    Raises:
        OutputWriteError: if the destination cannot be written.
    """
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(value, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp_path, path)
    except (OSError, RecursionError) as exc:
        if tmp_path.exists():
            tmp_path.unlink()
        if isinstance(exc, RecursionError):
            raise OutputWriteError(f"Document is nested too deeply to write to {path}") from exc
        raise OutputWriteError(f"Cannot write output file {path}: {exc}") from exc
