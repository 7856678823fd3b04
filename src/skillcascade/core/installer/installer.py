"""Transactional installation of skills into model directories.

Layout (``base`` is the project root)::

    base/skills/react                         canonical source (never written)
    base/.agents/skills/react -> ../../skills/react          staging link
    base/.claude/skills/react -> ../../.agents/skills/react  model link

In ``LOCAL`` mode a model link always points at the staging link, never at
the source, so every model shares one resolved target and the source can be
re-pointed without touching installed models. ``EXTERNAL`` mode copies the
source instead.

Re-running an install is never destructive: a model entry that is already a
symlink is left alone and reported as skipped, without reading or
validating what it points to. A model entry that is a plain file or
directory is considered stale and replaced.

Batches are all-or-nothing for installs. Removals cannot be undone because
no backup is taken; rollback reports them as unrecoverable.

Installers do not lock the target tree. Running two installers against the
same model directory at once is unsupported.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from skillcascade.constants import SKILLS_DIR, STAGING_DIR
from skillcascade.core.installer.fs import (
    copy_tree,
    create_symlink,
    ensure_dir,
    path_present,
    relative_link_target,
    remove_path,
)
from skillcascade.core.installer.models import (
    BatchResult,
    InstallMode,
    InstallOutcome,
    RollbackReport,
    TransactionAction,
    TransactionLog,
)
from skillcascade.exceptions import FileSystemError

logger = logging.getLogger(__name__)


class Installer:
    """Installs and removes skills under one project root.

    Args:
        base_dir: Project root holding ``skills/`` and ``.agents/skills/``.
        dry_run: When True, every mutating operation only logs what it
            would do. Nothing is written and no transaction is recorded.
    """

    def __init__(self, base_dir: Path, dry_run: bool = False) -> None:
        self.base_dir = Path(base_dir).absolute()
        self.dry_run = dry_run

    # -- Paths --------------------------------------------------------------

    def source_path(self, skill_name: str) -> Path:
        return self.base_dir / SKILLS_DIR / skill_name

    def staging_path(self, skill_name: str) -> Path:
        return self.base_dir / STAGING_DIR / skill_name

    @staticmethod
    def target_path(skill_name: str, model_dir: Path) -> Path:
        return Path(model_dir).absolute() / SKILLS_DIR / skill_name

    # -- Single-skill operations ---------------------------------------------

    def setup_model(self, model_dir: Path) -> None:
        """Make sure ``<model_dir>/skills`` exists."""
        skills_dir = Path(model_dir).absolute() / SKILLS_DIR
        if self.dry_run:
            logger.info("[DRY RUN] Would set up model directory %s", skills_dir)
            return
        ensure_dir(skills_dir)

    def install_skill(
        self,
        skill_name: str,
        model_dir: Path,
        mode: InstallMode = InstallMode.LOCAL,
        log: TransactionLog | None = None,
    ) -> InstallOutcome:
        """Install one skill into a model directory.

        Args:
            skill_name: Skill under ``<base>/skills/``.
            model_dir: Model root, e.g. ``<base>/.claude``.
            mode: Symlink cascade or copy.
            log: Transaction log of the surrounding batch. A private log is
                used when omitted, which makes the call non-rollbackable.

        Returns:
            ``SKIPPED`` if the model entry is already a symlink, otherwise
            ``INSTALLED``. In dry-run mode the outcome is what a real run
            would report.

        Raises:
            FileSystemError: If the source is missing or a mutation fails.
        """
        if log is None:
            log = TransactionLog()

        source = self.source_path(skill_name)
        staging = self.staging_path(skill_name)
        target = self.target_path(skill_name, model_dir)

        if not source.is_dir():
            raise FileSystemError(f"Source skill not found: {source}", source)

        already_linked = mode is InstallMode.LOCAL and target.is_symlink()

        if self.dry_run:
            if already_linked:
                logger.info("[DRY RUN] %s already installed as symlink, would skip", skill_name)
                return InstallOutcome.SKIPPED
            logger.info(
                "[DRY RUN] Would install %s (%s): %s -> %s",
                skill_name,
                "symlink cascade" if mode is InstallMode.LOCAL else "copy",
                source,
                target,
            )
            return InstallOutcome.INSTALLED

        if mode is InstallMode.LOCAL:
            self._ensure_staging_link(skill_name, source, staging)

            # Symlinks track the canonical source, so they are always current.
            if already_linked:
                logger.debug("Skipping %s (already installed as symlink)", skill_name)
                return InstallOutcome.SKIPPED

        transaction = log.record(skill_name, target, TransactionAction.INSTALL)

        if path_present(target):
            logger.warning("Target already exists, replacing: %s", target)
            remove_path(target)

        if mode is InstallMode.LOCAL:
            create_symlink(relative_link_target(staging, target), target)
            logger.info("Symlinked: %s", skill_name)
        else:
            copy_tree(source, target)
            logger.info("Copied: %s", skill_name)

        transaction.completed = True
        return InstallOutcome.INSTALLED

    def _ensure_staging_link(self, skill_name: str, source: Path, staging: Path) -> None:
        """Create the shared staging link, or re-point it if the source moved."""
        expected = relative_link_target(source, staging)
        if staging.is_symlink():
            if os.readlink(staging) == expected:
                return
            logger.debug("Re-pointing staging link for %s", skill_name)
            remove_path(staging)
        elif path_present(staging):
            return
        create_symlink(expected, staging)
        logger.debug("Created staging link: %s", staging)

    def uninstall_skill(
        self,
        skill_name: str,
        model_dir: Path,
        log: TransactionLog | None = None,
    ) -> bool:
        """Remove a skill's entry from a model directory.

        The source and the shared staging link are left in place.

        Returns:
            True if an entry was removed (or would be, in dry-run mode),
            False if nothing was installed.

        Raises:
            FileSystemError: If the removal fails.
        """
        if log is None:
            log = TransactionLog()

        target = self.target_path(skill_name, model_dir)
        if not path_present(target):
            logger.warning("Skill not installed: %s (%s)", skill_name, target)
            return False

        if self.dry_run:
            logger.info("[DRY RUN] Would uninstall %s: %s", skill_name, target)
            return True

        transaction = log.record(skill_name, target, TransactionAction.REMOVE)
        remove_path(target)
        transaction.completed = True
        logger.info("Uninstalled: %s", skill_name)
        return True

    # -- Batches -------------------------------------------------------------

    def install_with_rollback(
        self,
        skill_names: Sequence[str],
        model_dir: Path,
        mode: InstallMode = InstallMode.LOCAL,
    ) -> BatchResult:
        """Install skills in order, all or nothing.

        Skills are installed strictly one after another; a later skill may
        rely on a staging link created for an earlier one.

        Returns:
            Counts of installed and skipped skills, plus the batch's log.

        Raises:
            Exception: Whatever the failing install raised, re-raised after
                the whole batch has been rolled back. The ``RollbackReport``
                is attached to it as ``rollback``.
        """
        log = TransactionLog()
        installed = skipped = 0
        total = len(skill_names)

        try:
            for index, name in enumerate(skill_names, start=1):
                logger.info("[%d/%d] Installing %s", index, total, name)
                if self.install_skill(name, model_dir, mode, log) is InstallOutcome.SKIPPED:
                    skipped += 1
                else:
                    installed += 1
        except Exception as exc:
            logger.error("Installation failed, rolling back: %s", exc)
            exc.rollback = self.rollback(log)
            raise

        if skipped:
            logger.info("Installed: %d, Skipped: %d (already up-to-date)", installed, skipped)
        else:
            logger.info("Successfully installed %d skills", installed)
        return BatchResult(installed=installed, skipped=skipped, transactions=log)

    def rollback(self, log: TransactionLog) -> RollbackReport:
        """Undo a batch by replaying its log in reverse.

        Completed installs are removed if their target still exists.
        Completed removals cannot be restored and are only reported.
        Incomplete transactions never changed anything and are skipped. A
        failure to revert one transaction does not stop the others.
        """
        report = RollbackReport()
        if self.dry_run:
            logger.info("[DRY RUN] Would roll back %d transactions", len(log))
            return report

        logger.warning("Rolling back %d transactions", len(log))
        for transaction in reversed(log):
            if not transaction.completed:
                continue

            if transaction.action is TransactionAction.REMOVE:
                logger.warning("Cannot restore removed skill: %s", transaction.skill_name)
                report.unrecoverable.append(transaction)
                continue

            try:
                if path_present(transaction.target_path):
                    remove_path(transaction.target_path)
            except FileSystemError as exc:
                logger.error("Rollback failed for %s: %s", transaction.skill_name, exc)
                report.failed.append((transaction, str(exc)))
            else:
                logger.debug("Rolled back: %s", transaction.skill_name)
                report.reverted.append(transaction)

        return report
