#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON reading and writing with consistent formatting. Files that
hold secrets are written with owner-only permissions.
"""

import json
import os
from pathlib import Path
from typing import Any

PRIVATE_FILE_MODE = 0o600


def write_json(filepath: str | Path, data: Any, private: bool = False) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    The file is truncated and rewritten in place; parent directories are
    created as needed.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        private: If True, restrict the file to the owner (mode 0600)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    if private:
        # Created owner-only; an existing file keeps its mode unless reset
        fd = os.open(filepath, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PRIVATE_FILE_MODE)
        f = os.fdopen(fd, "w", encoding="utf-8")
    else:
        f = open(filepath, "w", encoding="utf-8")

    with f:
        if private:
            os.chmod(filepath, PRIVATE_FILE_MODE)
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        The parsed JSON data

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def format_json(data: Any, sort_keys: bool = False) -> str:
    """Format data as a pretty-printed JSON string for terminal output."""
    return json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys, default=str)
