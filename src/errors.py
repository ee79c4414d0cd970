"""Exception types raised by the package core."""


class PacmanError(Exception):
    """Base class for every error raised by pacstate."""


class ConfigError(PacmanError):
    """Invalid root directory or configuration file."""


class MalformedVersion(PacmanError, ValueError):
    """Version string does not follow ``[epoch:]upstream[-release]``."""


class InvalidPackage(PacmanError):
    """Package metadata is unreadable or lacks required fields."""


class DatabaseError(PacmanError):
    """Database root is unusable."""


class DatabaseLocked(DatabaseError):
    """Another process holds the database lock."""
