"""Search/listing interface implemented by repository backends."""

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from package import PackageRecord


class Index(ABC):
    """A searchable collection of packages.

    The core only consumes the records an index returns; searching and
    refreshing are up to the implementation.
    """

    @abstractmethod
    def search(self, name: str) -> List[PackageRecord]:
        """Search for ``name``.

        Returns:
            Records with only name and version set.
        """

    @abstractmethod
    def search_detailed(self, name: str) -> List[PackageRecord]:
        """Same as ``search`` but with fully populated records."""

    @abstractmethod
    def refresh(self) -> None:
        """Refresh the index from its source."""

    @abstractmethod
    def list_contents(self, package: Union[PackageRecord, str]) -> Optional[List[str]]:
        """List the files of a package, or None when no package matches."""
