"""Shared fixtures for pacstate tests."""

import io
import tarfile

import pytest

BASIC_PKGINFO = """\
name = foo
version = 1.2-3
description = Foo utilities
depends = bar,baz
author = Jane Doe
license = GPL
size = 1024
"""


def build_archive(path, members):
    """Write a tar archive at ``path`` from a {name: text} mapping."""
    with tarfile.open(path, "w") as tar:
        for name, text in members.items():
            data = text.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return str(path)


@pytest.fixture
def make_archive(tmp_path):
    """Factory creating package archives inside tmp_path."""
    def _make(members, filename="foo-1.2-3.tar"):
        return build_archive(tmp_path / filename, members)
    return _make


@pytest.fixture
def db_root(tmp_path):
    """Empty, writable database root."""
    root = tmp_path / "db"
    root.mkdir()
    return str(root)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep user config and environment out of the tests."""
    for var in ("PACSTATE_CONFIG", "PACSTATE_ROOT", "PACSTATE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
