"""Tests for reading package archives."""

import pytest

from errors import InvalidPackage
from package import Archive, ArchiveReader, PackageRecord, TarArchiveReader

from conftest import BASIC_PKGINFO


def test_read_package_info(make_archive):
    path = make_archive({".PKGINFO": BASIC_PKGINFO, "usr/bin/foo": "#!/bin/sh\n"})
    record = PackageRecord()
    record.read_package_info(path)
    assert str(record) == "foo-1.2-3"
    assert record.changelog is None


def test_changelog_attached(make_archive):
    path = make_archive({".PKGINFO": BASIC_PKGINFO, ".CHANGELOG": "1.2-3: fixes\n"})
    record = PackageRecord()
    record.read_package_info(path)
    assert record.changelog == "1.2-3: fixes\n"


def test_dot_slash_member_names(make_archive):
    path = make_archive({"./.PKGINFO": BASIC_PKGINFO})
    record = PackageRecord()
    record.read_package_info(path)
    assert record.name == "foo"


def test_missing_pkginfo(make_archive):
    path = make_archive({"usr/bin/foo": "x"})
    with pytest.raises(InvalidPackage) as exc:
        PackageRecord().read_package_info(path)
    assert ".PKGINFO" in str(exc.value)


def test_not_an_archive(tmp_path):
    path = tmp_path / "broken.tar"
    path.write_bytes(b"definitely not a tarball")
    with pytest.raises(InvalidPackage):
        PackageRecord().read_package_info(str(path))


def test_missing_file(tmp_path):
    with pytest.raises(InvalidPackage):
        TarArchiveReader().open(str(tmp_path / "nope.tar"))


class _MemoryArchive(Archive):
    def __init__(self, members):
        self.members = members
        self.closed = False

    def member_bytes(self, name):
        return self.members.get(name)

    def close(self):
        self.closed = True


class _MemoryReader(ArchiveReader):
    def __init__(self, members):
        self.archive = _MemoryArchive(members)
        self.opened = []

    def open(self, path):
        self.opened.append(path)
        return self.archive


def test_injected_reader():
    reader = _MemoryReader({".PKGINFO": b"name=mem\nversion=0.5\n"})
    record = PackageRecord()
    record.read_package_info("any/path.tar", reader=reader)
    assert str(record) == "mem-0.5"
    assert reader.opened == ["any/path.tar"]
    assert reader.archive.closed


def test_archive_closed_on_error():
    reader = _MemoryReader({".PKGINFO": b"name=mem\n"})
    with pytest.raises(InvalidPackage):
        PackageRecord().read_package_info("x.tar", reader=reader)
    assert reader.archive.closed


def test_non_utf8_metadata():
    reader = _MemoryReader({".PKGINFO": b"name=\xff\xfe\n"})
    with pytest.raises(InvalidPackage):
        PackageRecord().read_package_info("x.tar", reader=reader)


def test_non_utf8_changelog_kept():
    reader = _MemoryReader({".PKGINFO": b"name=foo\nversion=1.0\n", ".CHANGELOG": b"caf\xe9\n"})
    record = PackageRecord()
    record.read_package_info("x.tar", reader=reader)
    assert str(record) == "foo-1.0"
    assert record.changelog == "caf\ufffd\n"
