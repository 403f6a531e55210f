"""Retrieval of the command line of a running process."""

from __future__ import annotations

import os
import sys

import psutil


def split_command_line(buffer: str) -> list[str]:
    """Split a raw command line on spaces, honouring double quotes.

    Quotes are dropped; empty tokens are left out.
    """
    out: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in buffer:
        if char == " " and not in_quotes:
            out.append("".join(current))
            current = []
        elif char == '"':
            in_quotes = not in_quotes
        else:
            current.append(char)
    out.append("".join(current))
    return [token for token in out if token]


def _get_cmd_linux(pid: int) -> list[str]:
    path = f"/proc/{pid}/cmdline"
    if not os.path.exists(path):
        raise ProcessLookupError(
            f"cannot retrieve cmdline file for process with pid={pid}"
        )
    with open(path, "rb") as handle:
        buffer = handle.read()
    if not buffer:
        raise ValueError("cmdline is empty")

    out = [
        chunk.decode("utf-8", errors="replace")
        for chunk in buffer.replace(b"\x00", b" ").split(b" ")
        if chunk
    ]
    if out:
        out[0] = os.path.realpath(f"/proc/{pid}/exe", strict=True)
    return out


def _get_cmd_psutil(pid: int) -> list[str]:
    try:
        args = psutil.Process(pid).cmdline()
    except psutil.NoSuchProcess as exc:
        raise ProcessLookupError(f"no process with pid={pid}") from exc
    except psutil.AccessDenied as exc:
        raise PermissionError(f"cannot read command line of pid={pid}") from exc
    return [arg for arg in args if arg]


def get_cmd(pid: int) -> list[str]:
    """Return the command line of a process; the first item is the program.

    On Linux the program is the resolved path of the executable.
    """
    if pid <= 0:
        raise ValueError("the PID is not strictly positive")
    if sys.platform.startswith("linux"):
        return _get_cmd_linux(pid)
    return _get_cmd_psutil(pid)