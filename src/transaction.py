"""Pending package operations."""

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

from package import PackageRecord


class Operation(Enum):
    """Operation queued for a package."""
    INSTALL = "install"
    UPGRADE = "upgrade"
    REMOVE = "remove"
    REINSTALL = "reinstall"
    HOLD = "hold"


PackageRef = Union[PackageRecord, str]


def _key(package: PackageRef) -> str:
    return package if isinstance(package, str) else str(package)


class Transaction:
    """Uncommitted set of per-package operations.

    Operations are keyed by the exact ``name-version`` string: a second
    operation for the same key replaces the first, while another version of
    the same package gets its own entry. Nothing here executes anything.
    """

    def __init__(self):
        self._pending: Dict[str, Operation] = {}

    def set_state(self, package: PackageRecord, operation: Operation) -> None:
        """Queue ``operation`` for ``package``, replacing any earlier one."""
        if not isinstance(operation, Operation):
            raise TypeError(f"Expected Operation, got {operation!r}")
        self._pending[str(package)] = operation

    def install(self, package: PackageRecord) -> None:
        self.set_state(package, Operation.INSTALL)

    def upgrade(self, package: PackageRecord) -> None:
        self.set_state(package, Operation.UPGRADE)

    def remove(self, package: PackageRecord) -> None:
        self.set_state(package, Operation.REMOVE)

    def reinstall(self, package: PackageRecord) -> None:
        self.set_state(package, Operation.REINSTALL)

    def hold(self, package: PackageRecord) -> None:
        self.set_state(package, Operation.HOLD)

    def state(self, package: PackageRef) -> Optional[Operation]:
        """Pending operation for a record or ``name-version`` key."""
        return self._pending.get(_key(package))

    def discard(self, package: PackageRef) -> None:
        self._pending.pop(_key(package), None)

    def clear(self) -> None:
        self._pending.clear()

    def by_operation(self, operation: Operation) -> List[str]:
        """Sorted keys with ``operation`` pending."""
        return sorted(k for k, op in self._pending.items() if op is operation)

    def items(self) -> List[Tuple[str, Operation]]:
        return list(self._pending.items())

    def __contains__(self, package: PackageRef) -> bool:
        return _key(package) in self._pending

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._pending))

    def __len__(self) -> int:
        return len(self._pending)
