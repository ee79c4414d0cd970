"""Archive access used to read package artifacts.

The package core only needs named members out of an artifact, so archives
are reached through the small ``ArchiveReader``/``Archive`` pair below and
the concrete format can be swapped by injecting another reader.
"""

from __future__ import annotations

import logging
import tarfile
from abc import ABC, abstractmethod
from typing import Optional

from errors import InvalidPackage
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class Archive(ABC):
    """An opened archive. Closing is idempotent."""

    @abstractmethod
    def member_bytes(self, name: str) -> Optional[bytes]:
        """Return the content of member ``name`` or None if it is absent."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying resource."""

    def __enter__(self) -> "Archive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ArchiveReader(ABC):
    """Factory opening archives from a path."""

    @abstractmethod
    def open(self, path: str) -> Archive:
        """Open ``path``.

        Raises:
            InvalidPackage: if the file cannot be opened as an archive.
        """


class TarArchive(Archive):
    """Archive backed by ``tarfile``."""

    def __init__(self, handle: tarfile.TarFile):
        self._handle = handle
        self._closed = False

    def _find(self, name: str) -> Optional[tarfile.TarInfo]:
        for candidate in (name, f"./{name}"):
            try:
                return self._handle.getmember(candidate)
            except KeyError:
                continue
        return None

    def member_bytes(self, name: str) -> Optional[bytes]:
        info = self._find(name)
        if info is None or not info.isfile():
            return None
        stream = self._handle.extractfile(info)
        if stream is None:
            return None
        with stream:
            return stream.read()

    def close(self) -> None:
        if not self._closed:
            self._handle.close()
            self._closed = True


class TarArchiveReader(ArchiveReader):
    """Default reader for ``<name>-<version>.tar`` artifacts (any tar compression)."""

    def open(self, path: str) -> Archive:
        try:
            handle = tarfile.open(path, mode="r:*")
        except (OSError, tarfile.TarError) as e:
            raise InvalidPackage(f"Unable to open archive file {path}") from e
        if is_debug_enabled(logger):
            logger.debug(
                "Archive opened",
                extra=extra_context(event="archive_open", component="archive", target=path),
            )
        return TarArchive(handle)
