"""Utility helpers for document IO and logging."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional, Union

import yaml

PathLike = Union[str, Path]


def json_dumps(obj: object) -> str:
    """Serialize JSON readably with a trailing newline; key order is kept."""
    return json.dumps(obj, ensure_ascii=False, indent=2) + "\n"


def read_text(path: PathLike) -> str:
    return Path(path).read_text(encoding="utf-8")


def read_document(path: PathLike) -> Any:
    """Load a YAML or JSON file (JSON is read by the YAML loader too)."""

    return yaml.safe_load(read_text(path))


def write_text(path: PathLike, content: str, *, encoding: str = "utf-8") -> Path:
    """Write text content to a file, creating parent directories as needed."""

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding=encoding)
    return file_path


def emit(content: str, path: Optional[PathLike] = None) -> None:
    """Write ``content`` to ``path``, or to stdout when no path is given."""

    if path is None:
        sys.stdout.write(content)
    else:
        write_text(path, content)


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)


__all__ = ["emit", "json_dumps", "read_document", "read_text", "warn", "write_text"]
