"""File system helpers."""

from __future__ import annotations

import os
import posixpath
from typing import Callable, Iterable


def file_exists(path: str | os.PathLike) -> bool:
    """Tell whether the path can be stat'ed."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def keep_leaves(files: Iterable[str]) -> list[str]:
    """Keep only the most precise paths of a list.

    For "/a/b/c", "/a/b", "/b/d", "/b" it returns "/b/d", "/a/b/c".
    The output is in reverse sorted order.
    """
    ordered = sorted(files)
    if len(ordered) <= 1:
        return ordered

    base = ordered[-1]
    base_dir = posixpath.dirname(base)
    out = [base]
    for path in reversed(ordered[:-1]):
        if base.startswith(path) and posixpath.dirname(path) != base_dir:
            continue
        out.append(path)
        base = path
        base_dir = posixpath.dirname(base)
    return out


def get_lines(file: str | os.PathLike, *callbacks: Callable[[str], str]) -> list[str]:
    """Read all the lines of a file, without line terminators.

    Each callback is applied in turn to every line:
    callback2(callback1(callback0(line))).
    """
    result = []
    with open(file, encoding="utf-8", errors="replace", newline="") as handle:
        for raw in handle:
            line = raw[:-1] if raw.endswith("\n") else raw
            if line.endswith("\r"):
                line = line[:-1]
            for callback in callbacks:
                line = callback(line)
            result.append(line)
    return result