"""Whether pings must be sent as privileged (raw ICMP) or unprivileged."""

from __future__ import annotations

import os
import re
import sys
from typing import Iterable

_PING_GROUP_RANGE_PATH = "/proc/sys/net/ipv4/ping_group_range"
_RANGE_RE = re.compile(r"^([0-9]+)[ ]+([0-9]+)$")


def parse_ping_group_range(value: str) -> tuple[int, int]:
    """Parse the net.ipv4.ping_group_range value into (start, end).

    A value of another shape gives (-1, -1), a range no group belongs to.
    """
    match = _RANGE_RE.match(value.strip().replace("\t", " "))
    if match is None:
        return -1, -1
    return int(match.group(1)), int(match.group(2))


def is_allowed_to_ping(group_ids: Iterable[int], start: int, end: int) -> bool:
    """Tell whether one of the groups lies in the [start, end] range."""
    if start > end:
        return False
    return any(start <= gid <= end for gid in group_ids)


def _group_ids() -> set[int]:
    return {os.getgid(), *os.getgroups()}


def use_icmp() -> bool:
    """Tell whether the pinger must be privileged.

    Always on Windows. Elsewhere, when the user's groups are outside the
    ping group range; False when the range or the groups cannot be read.
    """
    if sys.platform.startswith("win"):
        return True
    try:
        with open(_PING_GROUP_RANGE_PATH, encoding="ascii") as handle:
            start, end = parse_ping_group_range(handle.read())
        groups = _group_ids()
    except (OSError, ValueError):
        return False
    return not is_allowed_to_ping(groups, start, end)