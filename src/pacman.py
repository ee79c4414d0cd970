"""Package manager entry object: root directory, database and artifact cache."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from config import Settings
from constants import Constants
from database import PackageDatabase
from errors import ConfigError, DatabaseError
from package import PackageRecord
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class ExistenceCheck(ABC):
    """Strategy answering whether a package artifact is available."""

    @abstractmethod
    def exists(self, pacman: "Pacman", package: PackageRecord) -> bool:
        """Return True if ``package`` can be obtained through this strategy."""


class LocalCacheCheck(ExistenceCheck):
    """Artifact already present in the local package cache."""

    def exists(self, pacman: "Pacman", package: PackageRecord) -> bool:
        return os.path.isfile(pacman.cached_artifact(package))


class Pacman:
    """Ties a root directory to its database and package cache.

    Paths for the database and the cache are relative to the root.
    Availability checks run through ``checks`` in order; only the local
    cache is consulted by default, remote sources plug in as further
    ``ExistenceCheck`` strategies.
    """

    def __init__(
        self,
        root: str = ".",
        db_path: str = Constants.DB_PATH,
        cache_path: str = Constants.CACHE_PATH,
        checks: Optional[Iterable[ExistenceCheck]] = None,
    ):
        self.root = "."
        self.set_root(root)
        self.db_path = db_path
        self.cache_path = cache_path
        self.checks = list(checks) if checks is not None else [LocalCacheCheck()]

    @classmethod
    def from_settings(cls, settings: Settings, checks: Optional[Iterable[ExistenceCheck]] = None) -> "Pacman":
        """Build from resolved ``Settings``."""
        return cls(
            root=settings.root,
            db_path=settings.db_path,
            cache_path=settings.cache_path,
            checks=checks,
        )

    def get_root(self) -> str:
        return self.root

    def set_root(self, root: str) -> None:
        """Set the root directory.

        Raises:
            ConfigError: if ``root`` is not an existing directory.
        """
        if not os.path.isdir(root):
            raise ConfigError(f"{root} is not a directory or does not exist")
        self.root = root

    def path(self, relative: str) -> str:
        """Path of ``relative`` under the root."""
        return os.path.join(self.root, relative)

    @staticmethod
    def real_path(path: str, archive: str) -> Optional[str]:
        """Part of ``path`` that follows the archive file name.

        ``real_path("/tmp/foo-1.0.tar/usr/bin/foo", "pkgs/foo-1.0.tar")``
        gives ``"usr/bin/foo"``; None when the archive name is not in path.
        """
        marker = os.path.basename(archive) + "/"
        start = path.find(marker)
        if start < 0:
            return None
        return path[start + len(marker):]

    def database(self, create: bool = False) -> PackageDatabase:
        """Open the package database.

        Args:
            create: Create the database root directory when missing.
        """
        db_root = self.path(self.db_path)
        if create and not os.path.isdir(db_root):
            try:
                os.makedirs(db_root, mode=Constants.DIR_MODE_WIDE)
            except OSError as e:
                raise DatabaseError(f"Unable to create {db_root}: {e}") from e
            logger.info("Created database root %s", db_root)
        return PackageDatabase(db_root)

    def cached_artifact(self, package: PackageRecord) -> str:
        """Cache location of ``<name>-<version>.tar`` for ``package``."""
        filename = f"{package}{Constants.ARCHIVE_SUFFIX}"
        return os.path.join(self.path(self.cache_path), filename)

    def package_exists(self, package: PackageRecord) -> bool:
        """Return True if any configured strategy can provide ``package``."""
        for check in self.checks:
            if check.exists(self, package):
                if is_debug_enabled(logger):
                    logger.debug(
                        "Package available",
                        extra=extra_context(
                            event="decision",
                            component="pacman",
                            action="package_exists",
                            outcome=type(check).__name__,
                            package=str(package),
                        ),
                    )
                return True
        return False
