"""Data model for package versions."""

from dataclasses import dataclass

DEFAULT_EPOCH = 0
DEFAULT_UPSTREAM = "0.0"
DEFAULT_RELEASE = 0


@dataclass(frozen=True)
class Version:
    """A parsed ``[epoch:]upstream[-release]`` version.

    Equality is structural. Use ``versioning.compare_versions`` for ordering,
    two versions that are not equal here may still compare as 0 (``01`` and
    ``1`` for instance).
    """
    epoch: int = DEFAULT_EPOCH
    upstream: str = DEFAULT_UPSTREAM
    release: int = DEFAULT_RELEASE  # 0 means no release suffix

    def is_null(self) -> bool:
        """Return True for the sentinel ``0:0.0-0`` version."""
        return (
            self.epoch == DEFAULT_EPOCH
            and self.upstream == DEFAULT_UPSTREAM
            and self.release == DEFAULT_RELEASE
        )

    def __str__(self) -> str:
        epoch = f"{self.epoch}:" if self.epoch != DEFAULT_EPOCH else ""
        release = f"-{self.release}" if self.release != DEFAULT_RELEASE else ""
        return f"{epoch}{self.upstream}{release}"


NULL_VERSION = Version()
