"""Key-value store kept in a ``*.stamps`` JSON file next to the executable."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any


class StampError(Exception):
    """Raised when the stamps store cannot be read, parsed or written."""


def get_stamps_file_path() -> Path:
    """Path of the ``*.stamps`` file used as the store."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    if not program:
        raise StampError("cannot get stamps file path")
    return Path(program).resolve().with_suffix(".stamps")


def get_stamp_value(key: str, json_value: Any) -> str:
    """Return the string stored under ``key`` in a parsed stamps document."""
    value = json_value.get(key) if isinstance(json_value, dict) else None
    if not isinstance(value, str):
        raise StampError(f"cannot get stamp value for key '{key}'")
    return value


def read_stamps_file_to_json(path: Path | None = None) -> Any:
    """Read the stamps file and parse its JSON content."""
    stamps_path = Path(path) if path is not None else get_stamps_file_path()
    try:
        content = stamps_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StampError("cannot find or read stamps file") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise StampError("stamps file doesn't contain valid JSON") from exc


def save_stamp_value(key: str, value: str, path: Path | None = None) -> None:
    """Store ``value`` under ``key``, keeping the other entries."""
    stamps_path = Path(path) if path is not None else get_stamps_file_path()
    try:
        document = read_stamps_file_to_json(stamps_path)
    except StampError:
        document = {}
    if not isinstance(document, dict):
        raise StampError("stamps file doesn't contain JSON object")
    document[key] = value
    try:
        stamps_path.write_text(
            json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as exc:
        raise StampError("cannot write to stamps file") from exc