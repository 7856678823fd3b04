"""Installer data models: modes, outcomes, transactions, and reports.

A ``TransactionLog`` is created fresh for every batch and handed back to the
caller in the ``BatchResult``; rollback takes the log as an argument. The
installer itself keeps no transaction state between calls, and nothing here
is ever written to disk. Installed state is always re-derived by probing the
filesystem.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class InstallMode(Enum):
    """How a skill is placed into a model directory.

    - **LOCAL**: two-hop symlink cascade through the shared staging area.
    - **EXTERNAL**: independent recursive copy of the source directory.
    """

    LOCAL = "local"
    EXTERNAL = "external"


class InstallOutcome(Enum):
    """Result of a single ``install_skill`` call that did not raise."""

    INSTALLED = "installed"
    SKIPPED = "skipped"


class TransactionAction(Enum):
    INSTALL = "install"
    REMOVE = "remove"


@dataclass
class InstallTransaction:
    """One filesystem mutation attempted during a batch.

    Recorded before the mutation starts; ``completed`` flips to True only
    once it has fully succeeded.
    """

    skill_name: str
    target_path: Path
    action: TransactionAction
    completed: bool = False


class TransactionLog:
    """Append-only, ordered record of the transactions in one batch."""

    def __init__(self) -> None:
        self._entries: list[InstallTransaction] = []

    def record(self, skill_name: str, target_path: Path, action: TransactionAction) -> InstallTransaction:
        """Append a new, not yet completed transaction and return it."""
        transaction = InstallTransaction(skill_name, Path(target_path), action)
        self._entries.append(transaction)
        return transaction

    @property
    def completed(self) -> list[InstallTransaction]:
        return [t for t in self._entries if t.completed]

    def __iter__(self) -> Iterator[InstallTransaction]:
        return iter(self._entries)

    def __reversed__(self) -> Iterator[InstallTransaction]:
        return reversed(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TransactionLog({self._entries!r})"


@dataclass
class BatchResult:
    """Outcome of a batch install that completed without error.

    Attributes:
        installed: Skills newly linked or copied.
        skipped: Skills already present as symlinks (left untouched).
        transactions: Every mutation the batch performed.
    """

    installed: int
    skipped: int
    transactions: TransactionLog = field(default_factory=TransactionLog)


@dataclass
class RollbackReport:
    """What a rollback did, so operators can reconcile by hand if needed.

    Attributes:
        reverted: Completed installs whose target was removed (or was
            already gone).
        failed: Completed installs whose removal raised, with the error.
        unrecoverable: Completed removals. No backup is kept, so these
            cannot be restored.
    """

    reverted: list[InstallTransaction] = field(default_factory=list)
    failed: list[tuple[InstallTransaction, str]] = field(default_factory=list)
    unrecoverable: list[InstallTransaction] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        """True if the filesystem is back where the batch started."""
        return not self.failed and not self.unrecoverable
