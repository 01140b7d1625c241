"""
Backup and restore of the mutable game data.

Randomizing rewrites sound files below the unpacked data directory and the
caption database in place, so pristine copies must exist *before* the first
mutation and must never be overwritten by a later run (a second run would
otherwise back up already-randomized content and lose the original).

Three idempotent gates take care of this, always evaluated in this order:

1. **unpack** – packed archive present, no data directory yet → unpack it.
   The archive stays where it is; unpacking alone is not a backup.
2. **archive backup** – packed archive present, no ``.bak`` yet → rename the
   archive to ``.bak``.  From then on the game reads the unpacked directory.
3. **caption backup** – caption file present, no ``.bak`` yet → copy it.

Each gate re-inspects the filesystem (:func:`inspect`) immediately before
acting; nothing is cached between calls.  Once a backup artifact exists its
gate is closed for good.

Restoring never touches the backups themselves, so it can be repeated.
"""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path
from typing import Optional

from logrando.config.schema import LayoutSection
from logrando.models import InstallationState
from logrando.utils.archive import unpack
from logrando.utils.errors import BackupMissingError, InstallationError
from logrando.utils.paths import GamePaths

from .types import BackupResult, RestoreResult

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 0 – state inspection
# ---------------------------------------------------------------------------


def inspect(game_dir: Path, layout: Optional[LayoutSection] = None) -> InstallationState:
    """Return which backup gates still need applying for *game_dir*."""
    paths = GamePaths.for_game(game_dir, layout)
    zip_exists = paths.data_zip.exists()
    subs_exists = paths.subtitles.exists()
    return InstallationState(
        needs_unpack=zip_exists and not paths.data_dir.exists(),
        needs_archive_backup=zip_exists and not paths.data_bak.exists(),
        needs_caption_backup=subs_exists and not paths.subtitles_bak.exists(),
    )


def check_game_dir(game_dir: Path, layout: Optional[LayoutSection] = None) -> bool:
    """Return *True* when *game_dir* holds the data archive or its unpacked tree."""
    paths = GamePaths.for_game(game_dir, layout)
    return paths.data_zip.exists() or paths.data_dir.exists()


# ---------------------------------------------------------------------------
# 1 – gates
# ---------------------------------------------------------------------------


def unpack_data(game_dir: Path, layout: Optional[LayoutSection] = None) -> bool:
    """Apply the unpack gate.  Returns *True* when the archive was unpacked."""
    if not inspect(game_dir, layout).needs_unpack:
        return False
    paths = GamePaths.for_game(game_dir, layout)
    log.info("Unpacking data files %s → %s", paths.data_zip, paths.data_dir)
    unpack(paths.data_zip, paths.data_dir)
    return True


def backup_data(game_dir: Path, layout: Optional[LayoutSection] = None) -> bool:
    """Apply the archive-backup gate.  Returns *True* when the archive was moved."""
    if not inspect(game_dir, layout).needs_archive_backup:
        return False
    paths = GamePaths.for_game(game_dir, layout)
    log.info("Backing up data files %s → %s", paths.data_zip, paths.data_bak)
    paths.data_zip.rename(paths.data_bak)
    return True


def backup_subtitles(game_dir: Path, layout: Optional[LayoutSection] = None) -> bool:
    """Apply the caption-backup gate.  Returns *True* when a copy was made."""
    if not inspect(game_dir, layout).needs_caption_backup:
        return False
    paths = GamePaths.for_game(game_dir, layout)
    log.info("Backing up subtitles %s → %s", paths.subtitles, paths.subtitles_bak)
    shutil.copyfile(paths.subtitles, paths.subtitles_bak)
    return True


def ensure_backups(game_dir: Path, layout: Optional[LayoutSection] = None) -> BackupResult:
    """Evaluate and apply all three gates in order.

    Args:
        game_dir: Game installation directory.
        layout: Optional layout override.

    Returns:
        :class:`BackupResult` telling which gates acted during this call.

    Raises:
        InstallationError: If *game_dir* has neither archive nor data directory.
        OSError: The first filesystem failure; later gates are not attempted.
    """
    game_dir = Path(game_dir)
    if not check_game_dir(game_dir, layout):
        paths = GamePaths.for_game(game_dir, layout)
        raise InstallationError(
            f"{game_dir} contains neither {paths.data_zip.name} nor {paths.data_dir.name}/"
        )

    try:
        unpacked = unpack_data(game_dir, layout)
        archived = backup_data(game_dir, layout)
        captioned = backup_subtitles(game_dir, layout)
    except Exception as exc:
        log.error("Backing up %s failed: %s", game_dir, exc)
        raise

    return BackupResult(
        game_dir=game_dir,
        unpacked=unpacked,
        archive_backed_up=archived,
        captions_backed_up=captioned,
    )


# ---------------------------------------------------------------------------
# 2 – restore
# ---------------------------------------------------------------------------


def restore_data(game_dir: Path, layout: Optional[LayoutSection] = None) -> Path:
    """Rebuild the unpacked data directory from the archive backup.

    Returns:
        The recreated data directory.

    Raises:
        BackupMissingError: If no archive backup exists.
    """
    paths = GamePaths.for_game(game_dir, layout)
    if not paths.data_bak.exists():
        raise BackupMissingError(
            f"Could not restore data file backup: {paths.data_bak} does not exist"
        )
    if paths.data_dir.exists():
        log.info("Removing modified data directory %s", paths.data_dir)
        shutil.rmtree(paths.data_dir)
    return unpack(paths.data_bak, paths.data_dir)


def restore_subtitles(game_dir: Path, layout: Optional[LayoutSection] = None) -> Path:
    """Copy the caption backup over the live caption database.

    I/O errors (including a missing backup) propagate unchanged.
    """
    paths = GamePaths.for_game(game_dir, layout)
    shutil.copyfile(paths.subtitles_bak, paths.subtitles)
    log.info("Restored %s from %s", paths.subtitles, paths.subtitles_bak)
    return paths.subtitles


def restore_backups(game_dir: Path, layout: Optional[LayoutSection] = None) -> RestoreResult:
    """Restore captions, then data files, continuing past a failed step."""
    game_dir = Path(game_dir)
    errors: list[str] = []
    subs_ok = data_ok = False

    try:
        restore_subtitles(game_dir, layout)
        subs_ok = True
    except OSError as exc:
        log.error("Failure restoring subtitle backup: %s", exc)
        errors.append(f"subtitles: {exc}")

    try:
        restore_data(game_dir, layout)
        data_ok = True
    except (BackupMissingError, OSError, zipfile.BadZipFile) as exc:
        log.error("Failure restoring audio file backup: %s", exc)
        errors.append(f"data: {exc}")

    return RestoreResult(
        game_dir=game_dir,
        subtitles_restored=subs_ok,
        data_restored=data_ok,
        errors=errors,
    )


__all__ = [
    "backup_data",
    "backup_subtitles",
    "check_game_dir",
    "ensure_backups",
    "inspect",
    "restore_backups",
    "restore_data",
    "restore_subtitles",
    "unpack_data",
]
