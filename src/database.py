"""On-disk package database.

Layout under the database root::

    local/<name>/.PKGINFO           installed packages
    sync/<source>/<name>/.PKGINFO   packages available from a source
    db.lck                          advisory lock for mutating operations
"""

from __future__ import annotations

import fcntl
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import Iterator, List, Optional

from constants import Constants
from errors import DatabaseError, DatabaseLocked, InvalidPackage
from package import PackageRecord
from package.record import decode_changelog
from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


def _check_name(name: Optional[str]) -> str:
    if not name or name in (".", "..") or "/" in name or os.sep in name:
        raise InvalidPackage(f"Invalid package name {name!r}")
    return name


class PackageDatabase:
    """Local and sync package trees rooted at one directory."""

    def __init__(self, root: str):
        """Open the database, creating ``local`` and ``sync`` when missing.

        Raises:
            DatabaseError: if root is missing or not writable, or a subtree
                cannot be made writable.
        """
        if not os.path.isdir(root) or not os.access(root, os.W_OK):
            raise DatabaseError(f"{root} is not writable or does not exist")
        self.root = root
        self.local_path = os.path.join(root, Constants.LOCAL_DIR)
        self.sync_path = os.path.join(root, Constants.SYNC_DIR)
        for path in (self.local_path, self.sync_path):
            self._ensure_dir(path)

    @staticmethod
    def _ensure_dir(path: str) -> None:
        if not os.path.isdir(path):
            try:
                os.mkdir(path, Constants.DIR_MODE)
            except OSError as e:
                raise DatabaseError(f"Unable to create {path}: {e}") from e
            if not os.access(path, os.W_OK):
                try:
                    os.chmod(path, Constants.DIR_MODE_WIDE)
                except OSError as e:
                    raise DatabaseError(f"Unable to widen permissions of {path}: {e}") from e
            logger.debug(
                "Database directory created",
                extra=extra_context(event="mkdir", component="database", target=path),
            )
        if not os.access(path, os.W_OK):
            raise DatabaseError(f"{path} is not writable")

    @contextmanager
    def lock(self, blocking: bool = False) -> Iterator[None]:
        """Hold an exclusive advisory lock on the database root.

        Raises:
            DatabaseLocked: if ``blocking`` is False and the lock is held
                elsewhere.
        """
        lock_path = os.path.join(self.root, Constants.LOCK_FILE)
        with open(lock_path, "a+b") as fh:
            flags = fcntl.LOCK_EX if blocking else fcntl.LOCK_EX | fcntl.LOCK_NB
            try:
                fcntl.flock(fh.fileno(), flags)
            except BlockingIOError as e:
                raise DatabaseLocked(f"Database {self.root} is locked by another process") from e
            try:
                yield
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)

    def _local_dir(self, name: Optional[str]) -> str:
        return os.path.join(self.local_path, _check_name(name))

    @staticmethod
    def _load(pkg_dir: str) -> PackageRecord:
        record = PackageRecord()
        record.read_info_file(os.path.join(pkg_dir, Constants.PKGINFO_FILE))
        changelog_path = os.path.join(pkg_dir, Constants.CHANGELOG_FILE)
        if os.path.isfile(changelog_path):
            try:
                with open(changelog_path, "rb") as fh:
                    record.changelog = decode_changelog(fh.read())
            except OSError as e:
                raise InvalidPackage(f"Unable to read file: {changelog_path}") from e
        return record

    def is_installed(self, candidate: PackageRecord) -> bool:
        """Return True if ``candidate`` is installed with the same version.

        Only the canonical ``name-version`` text is compared, other fields
        of the stored record are ignored.
        """
        pkg_dir = self._local_dir(candidate.name)
        if not os.path.isdir(pkg_dir):
            return False
        local = self._load(pkg_dir)
        installed = str(local) == str(candidate)
        if is_debug_enabled(logger):
            logger.debug(
                "Installed check",
                extra=extra_context(
                    event="decision",
                    component="database",
                    action="is_installed",
                    outcome="installed" if installed else "different_version",
                    package=str(candidate),
                    local=str(local),
                ),
            )
        return installed

    def installed_record(self, name: str) -> Optional[PackageRecord]:
        """Return the installed record for ``name`` or None."""
        pkg_dir = self._local_dir(name)
        if not os.path.isdir(pkg_dir):
            return None
        return self._load(pkg_dir)

    def installed_names(self) -> List[str]:
        """Names of all installed packages, sorted."""
        return sorted(
            entry for entry in os.listdir(self.local_path)
            if os.path.isdir(os.path.join(self.local_path, entry))
        )

    def register(self, record: PackageRecord) -> None:
        """Store ``record`` as the installed version of its package."""
        pkg_dir = self._local_dir(record.name)
        if record.version is None:
            raise InvalidPackage(f"Missing version for package {record.name}")
        with self.lock():
            os.makedirs(pkg_dir, mode=Constants.DIR_MODE, exist_ok=True)
            self._write(os.path.join(pkg_dir, Constants.PKGINFO_FILE), record.to_info_text())
            changelog_path = os.path.join(pkg_dir, Constants.CHANGELOG_FILE)
            if record.changelog is not None:
                self._write(changelog_path, record.changelog)
            elif os.path.exists(changelog_path):
                os.remove(changelog_path)
        logger.info("Registered %s", record)

    def unregister(self, name: str) -> bool:
        """Remove the installed entry for ``name``; return whether it existed."""
        pkg_dir = self._local_dir(name)
        with self.lock():
            if not os.path.isdir(pkg_dir):
                return False
            shutil.rmtree(pkg_dir)
        logger.info("Unregistered %s", name)
        return True

    def sync_records(self, source: Optional[str] = None) -> List[PackageRecord]:
        """Records available under ``sync``, optionally for one source only."""
        if source is not None:
            sources = [_check_name(source)]
        else:
            sources = sorted(
                entry for entry in os.listdir(self.sync_path)
                if os.path.isdir(os.path.join(self.sync_path, entry))
            )
        records = []
        for src in sources:
            src_dir = os.path.join(self.sync_path, src)
            if not os.path.isdir(src_dir):
                continue
            for name in sorted(os.listdir(src_dir)):
                pkg_dir = os.path.join(src_dir, name)
                if os.path.isdir(pkg_dir):
                    records.append(self._load(pkg_dir))
        return records

    @staticmethod
    def _write(path: str, text: str) -> None:
        fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path), prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
