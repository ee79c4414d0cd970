"""Package metadata record."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Union

from constants import Constants
from errors import InvalidPackage, MalformedVersion
from versioning import Version, parse_version
from common.logging_utils import extra_context, is_debug_enabled

from .archive import ArchiveReader, TarArchiveReader
from .pkginfo import parse_pkginfo, render_pkginfo, split_list

logger = logging.getLogger(__name__)

_SIZE_PATTERN = re.compile(r"[0-9]+")

_TEXT = "text"
_LIST = "list"
_SIZE = "size"
_VERSION = "version"

# PKGINFO key -> (attribute, kind), in the order keys are written back.
_FIELDS = {
    "name": ("name", _TEXT),
    "version": ("version", _VERSION),
    "description": ("description", _TEXT),
    "depends": ("depends", _LIST),
    "optdepends": ("opt_depends", _LIST),
    "provides": ("provides", _LIST),
    "author": ("author", _TEXT),
    "license": ("license", _TEXT),
    "size": ("size", _SIZE),
    "replaces": ("replaces", _LIST),
    "conflicts": ("conflicts", _LIST),
    "native_language": ("native_language", _TEXT),
    "supported_languages": ("supported_languages", _LIST),
}


def _decode(data: bytes, member: str, path: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidPackage(f"{member} in archive {path} is not valid UTF-8") from e


def decode_changelog(data: bytes) -> str:
    """Decode changelog bytes; invalid UTF-8 sequences become U+FFFD."""
    return data.decode("utf-8", errors="replace")


class PackageRecord:
    """Metadata describing one package.

    A record starts empty and is filled from a PKGINFO blob, a PKGINFO file
    or a package archive. Every load clears the previous content first.
    """

    name: Optional[str]
    version: Optional[Version]
    description: Optional[str]
    author: Optional[str]
    license: Optional[str]
    size: Optional[int]
    depends: Optional[List[str]]
    opt_depends: Optional[List[str]]
    provides: Optional[List[str]]
    replaces: Optional[List[str]]
    conflicts: Optional[List[str]]
    native_language: Optional[str]
    supported_languages: Optional[List[str]]
    changelog: Optional[str]

    def __init__(self, name: Optional[str] = None, version: Union[Version, str, None] = None):
        self.reset_info()
        self.name = name
        self.version = parse_version(version) if isinstance(version, str) else version

    def reset_info(self) -> None:
        """Set every field to its absent state."""
        self.name = None
        self.version = None
        self.description = None
        self.author = None
        self.license = None
        self.size = None
        self.depends = None
        self.opt_depends = None
        self.provides = None
        self.replaces = None
        self.conflicts = None
        self.native_language = None
        self.supported_languages = None
        self.changelog = None

    def read_info(self, text: str, source: str = "<metadata>") -> None:
        """Fill the record from PKGINFO text.

        Args:
            text: PKGINFO content.
            source: Where the text came from, used in error messages.

        Raises:
            InvalidPackage: on a bad version or size, or when name or
                version is missing.
        """
        self.reset_info()
        try:
            self._apply_pkginfo(text, source)
        except InvalidPackage:
            self.reset_info()
            raise

        if is_debug_enabled(logger):
            logger.debug(
                "Package metadata read",
                extra=extra_context(event="pkginfo_read", component="package", target=source, package=str(self)),
            )

    def _apply_pkginfo(self, text: str, source: str) -> None:
        for key, value in parse_pkginfo(text).items():
            field = _FIELDS.get(key)
            if field is None:
                continue
            attr, kind = field
            if kind == _LIST:
                setattr(self, attr, split_list(value))
            elif kind == _VERSION:
                try:
                    self.version = parse_version(value)
                except MalformedVersion as e:
                    raise InvalidPackage(f"Bad version string in {source}: {e}") from e
            elif kind == _SIZE:
                if not _SIZE_PATTERN.fullmatch(value):
                    raise InvalidPackage(f"Bad size {value!r} in {source}")
                self.size = int(value)
            else:
                setattr(self, attr, value)

        if not self.name or self.version is None:
            raise InvalidPackage(f"Missing name or/and version in {source}")

    def read_info_file(self, path: str) -> None:
        """Fill the record from a PKGINFO file on disk."""
        try:
            with open(path, encoding="utf-8") as fh:
                text = fh.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidPackage(f"Unable to read file: {path}") from e
        self.read_info(text, source=path)

    def read_package_info(self, path: str, reader: Optional[ArchiveReader] = None) -> None:
        """Fill the record from a package archive.

        Args:
            path: Archive path.
            reader: Archive capability; defaults to ``TarArchiveReader``.

        Raises:
            InvalidPackage: if the archive cannot be opened, has no
                ``.PKGINFO`` member, or the metadata is invalid.
        """
        reader = reader or TarArchiveReader()
        with reader.open(path) as archive:
            pkginfo = archive.member_bytes(Constants.PKGINFO_FILE)
            if pkginfo is None:
                raise InvalidPackage(f"Unable to find file {Constants.PKGINFO_FILE} in archive {path}")
            self.read_info(_decode(pkginfo, Constants.PKGINFO_FILE, path), source=path)
            changelog = archive.member_bytes(Constants.CHANGELOG_FILE)
            if changelog is not None:
                self.changelog = decode_changelog(changelog)

    def to_info_text(self) -> str:
        """Serialize the record as PKGINFO text; absent fields are omitted."""
        pairs = []
        for key, (attr, kind) in _FIELDS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if kind == _LIST:
                value = ",".join(value)
            pairs.append((key, str(value)))
        return render_pkginfo(pairs)

    def as_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready dictionary of the record."""
        data: Dict[str, Any] = {}
        for attr, _kind in _FIELDS.values():
            value = getattr(self, attr)
            data[attr] = str(value) if isinstance(value, Version) else value
        data["changelog"] = self.changelog
        return data

    @property
    def key(self) -> str:
        """Canonical ``name-version`` string."""
        return str(self)

    def __str__(self) -> str:
        version = self.version if self.version is not None else ""
        return f"{self.name}-{version}"

    def __repr__(self) -> str:
        version = str(self.version) if self.version is not None else None
        return f"PackageRecord(name={self.name!r}, version={version!r})"
