"""Utility helpers for file IO and diagnostics."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

STDIO = "-"


def read_input(path: PathLike) -> bytes:
    """Read raw bytes from ``path``, or from stdin when it is ``-``."""
    if str(path) == STDIO:
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def write_output(path: PathLike, content: str, *, encoding: str = "utf-8") -> None:
    """Write text to ``path``, creating parent directories; ``-`` means stdout."""
    if str(path) == STDIO:
        sys.stdout.write(content)
        sys.stdout.flush()
        return
    file_path = Path(path)
    if file_path.parent != Path(""):
        file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding=encoding)


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)
