#!/usr/bin/env python3
"""
Core Utilities

Features:
- File I/O helpers
- String utilities
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Literal, Optional, overload

# region Common functions


def is_null_or_whitespace(s: Optional[str]) -> bool:
    """Check if a string is None, empty, or consists only of whitespace."""
    return s is None or s.strip() == ""


@overload
def open_for_write(path: Path, binary: Literal[True], **kwargs: Any) -> IO[bytes]: ...
@overload
def open_for_write(path: Path, binary: Literal[False] = ..., **kwargs: Any) -> IO[str]: ...


def open_for_write(path: Path, binary: bool = False, **kwargs: Any) -> IO[Any]:
    """Open ``path`` for writing, creating missing parent folders first."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    mode = "wb" if binary else "w"
    return open(path, mode, **kwargs)


# endregion Common functions
