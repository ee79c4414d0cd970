"""Constants used in the project."""

import os
from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2
    NEGATIVE = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    DB_PATH = "var/lib/pacman"
    CACHE_PATH = "var/cache/pacman/pkg"
    LOCAL_DIR = "local"
    SYNC_DIR = "sync"
    LOCK_FILE = "db.lck"
    PKGINFO_FILE = ".PKGINFO"
    CHANGELOG_FILE = ".CHANGELOG"
    ARCHIVE_SUFFIX = ".tar"

    # Directory modes used when initialising the database
    DIR_MODE = 0o700
    DIR_MODE_WIDE = 0o770

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    ENV_CONFIG = "PACSTATE_CONFIG"
    ENV_ROOT = "PACSTATE_ROOT"
    ENV_LOG_LEVEL = "PACSTATE_LOG_LEVEL"
    CONFIG_FILE_NAME = "pacstate.yml"
    DEFAULT_CONFIG_LOCATIONS = [
        CONFIG_FILE_NAME,
        os.path.join("~", ".config", "pacstate", CONFIG_FILE_NAME),
    ]
