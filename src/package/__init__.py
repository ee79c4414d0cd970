"""Package metadata records and archive access."""

from .archive import Archive, ArchiveReader, TarArchiveReader
from .record import PackageRecord

__all__ = ["Archive", "ArchiveReader", "TarArchiveReader", "PackageRecord"]
