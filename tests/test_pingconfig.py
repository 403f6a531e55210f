import os
from unittest import mock

import pytest

from situation import pingconfig
from situation.pingconfig import is_allowed_to_ping, parse_ping_group_range, use_icmp


def test_parse_range():
    assert parse_ping_group_range("0\t2147483647\n") == (0, 2147483647)
    assert parse_ping_group_range("  100   200 ") == (100, 200)


@pytest.mark.parametrize("value", ["", "abc", "1", "1 2 3", "-1 5"])
def test_parse_range_bad_shape(value):
    assert parse_ping_group_range(value) == (-1, -1)


def test_allowed():
    assert is_allowed_to_ping([5, 1000], 1000, 2000)
    assert not is_allowed_to_ping([5, 999], 1000, 2000)
    assert not is_allowed_to_ping([1500], 2000, 1000)
    assert not is_allowed_to_ping([], 0, 10)


def test_use_icmp_windows():
    with mock.patch("situation.pingconfig.sys.platform", "win32"):
        assert use_icmp() is True


def test_use_icmp_linux_allowed(tmp_path, monkeypatch):
    path = tmp_path / "range"
    path.write_text("0 2147483647\n")
    monkeypatch.setattr(pingconfig, "_PING_GROUP_RANGE_PATH", str(path))
    with mock.patch("situation.pingconfig.sys.platform", "linux"):
        assert use_icmp() is False


def test_use_icmp_linux_not_allowed(tmp_path, monkeypatch):
    path = tmp_path / "range"
    path.write_text("1 0\n")
    monkeypatch.setattr(pingconfig, "_PING_GROUP_RANGE_PATH", str(path))
    with mock.patch("situation.pingconfig.sys.platform", "linux"):
        assert use_icmp() is True


def test_use_icmp_unreadable(tmp_path, monkeypatch):
    monkeypatch.setattr(pingconfig, "_PING_GROUP_RANGE_PATH", str(tmp_path / "missing"))
    with mock.patch("situation.pingconfig.sys.platform", "linux"):
        assert use_icmp() is False


def test_use_icmp_matches_groups(tmp_path, monkeypatch):
    gid = os.getgid()
    path = tmp_path / "range"
    path.write_text(f"{gid} {gid}\n")
    monkeypatch.setattr(pingconfig, "_PING_GROUP_RANGE_PATH", str(path))
    with mock.patch("situation.pingconfig.sys.platform", "linux"):
        assert use_icmp() is False