import pytest

from situation.rpmdb import FILE_NAME, find_db_file


def test_default_path_wins(tmp_path):
    default = tmp_path / FILE_NAME
    default.write_bytes(b"")
    fallback = tmp_path / "lib"
    (fallback / "x").mkdir(parents=True)
    (fallback / "x" / FILE_NAME).write_bytes(b"")
    assert find_db_file(str(default), str(fallback)) == str(default)


def test_fallback_walk(tmp_path):
    fallback = tmp_path / "lib"
    nested = fallback / "sysimage" / "rpm"
    nested.mkdir(parents=True)
    target = nested / FILE_NAME
    target.write_bytes(b"")
    found = find_db_file(str(tmp_path / "missing"), str(fallback))
    assert found == str(target)


def test_fallback_lexical_order(tmp_path):
    fallback = tmp_path / "lib"
    for sub in ("b", "a"):
        (fallback / sub).mkdir(parents=True)
        (fallback / sub / FILE_NAME).write_bytes(b"")
    found = find_db_file(str(tmp_path / "missing"), str(fallback))
    assert found == str(fallback / "a" / FILE_NAME)


def test_not_found(tmp_path):
    fallback = tmp_path / "lib"
    fallback.mkdir()
    (fallback / "other.sqlite").write_bytes(b"")
    with pytest.raises(FileNotFoundError):
        find_db_file(str(tmp_path / "missing"), str(fallback))


def test_missing_fallback_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_db_file(str(tmp_path / "missing"), str(tmp_path / "nowhere"))