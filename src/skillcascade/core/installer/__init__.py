"""Skill installation with transaction logging and rollback.

Public API::

    from skillcascade.core.installer import Installer, InstallMode

    installer = Installer(Path("."))
    result = installer.install_with_rollback(order, Path(".claude"), InstallMode.LOCAL)
    print(result.installed, result.skipped)
"""

from skillcascade.core.installer.installer import Installer
from skillcascade.core.installer.models import (
    BatchResult,
    InstallMode,
    InstallOutcome,
    InstallTransaction,
    RollbackReport,
    TransactionAction,
    TransactionLog,
)

__all__ = [
    "BatchResult",
    "InstallMode",
    "InstallOutcome",
    "InstallTransaction",
    "Installer",
    "RollbackReport",
    "TransactionAction",
    "TransactionLog",
]
