import sys
import uuid

import pytest

from situation.files import file_exists, get_lines, keep_leaves


def test_file_exists_missing():
    assert file_exists("/" + uuid.uuid4().hex + uuid.uuid4().hex) is False


def test_file_exists_present():
    assert file_exists(sys.executable) is True


def test_keep_leaves():
    files = [
        "/d/e/f/g",
        "/d/f",
        "/d/e/f",
        "/a",
        "/a/b/c",
        "/a/c",
        "/b/c/d",
        "/b",
        "/b/c",
        "/c",
    ]
    expect = [
        "/d/f",
        "/d/e/f/g",
        "/c",
        "/b/c/d",
        "/a/c",
        "/a/b/c",
    ]
    assert keep_leaves(files) == expect


def test_keep_leaves_empty():
    assert keep_leaves([]) == []


def test_keep_leaves_single():
    assert keep_leaves(["/x/y"]) == ["/x/y"]


def test_get_lines(tmp_path):
    path = tmp_path / "getlines"
    path.write_text("".join(f"line{i}\n" for i in range(1, 11)))

    lines = get_lines(path)
    assert lines == [f"line{i}" for i in range(1, 11)]


def test_get_lines_with_callbacks(tmp_path):
    path = tmp_path / "getlines"
    path.write_text("".join(f"line{i}\n" for i in range(1, 11)))

    def trim_number(s):
        return "".join(c for c in s if not c.isdigit())

    lines = get_lines(path, trim_number, str.upper)
    assert lines == ["LINE"] * 10


def test_get_lines_crlf(tmp_path):
    path = tmp_path / "crlf"
    path.write_bytes(b"a\r\nb\r\nc")
    assert get_lines(path) == ["a", "b", "c"]


def test_get_lines_error():
    with pytest.raises(FileNotFoundError):
        get_lines("/file/not/found")