"""Utility helpers for removing staging directories left behind by repacks.

Patching a sound package unpacks it into ``<game>/tmp/<package stem>``,
swaps members, and packs it back.  The original package is only replaced at
the very end, so an interrupted run leaves a staging directory behind but
never a damaged package.  Those leftovers are always safe to delete.

The helpers perform deletion only and follow the same conventions:
    * every attempted deletion is logged at *INFO* or *ERROR* level;
    * ``dry=True`` turns deletions into no-ops while still logging what
      *would* have happened.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Optional

from logrando.config.schema import LayoutSection
from logrando.utils.paths import GamePaths

log = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# _rm_dir – internal primitive
# ─────────────────────────────────────────────────────────────────────────────


def _rm_dir(path: Path, *, dry: bool) -> bool:
    """Recursively remove *path* via :pyfunc:`shutil.rmtree`.

    Returns:
        *True* when the directory really vanished, *False* otherwise
        (including dry-run mode and any error raised by ``rmtree``).
    """
    if dry:
        log.info("[dry-run] would delete directory %s", path)
        return False

    try:
        shutil.rmtree(path)
        log.info("Deleted directory %s", path)
        return True
    except OSError as exc:
        log.error("Could not delete %s: %s", path, exc)
        return False


# ─────────────────────────────────────────────────────────────────────────────
# Public helpers
# ─────────────────────────────────────────────────────────────────────────────


def clear_staging_dir(path: Path) -> None:
    """Remove a stale per-package staging directory before it is reused.

    Unlike :func:`delete_staging` this propagates failures: a package cannot
    be patched safely on top of an old staging tree.
    """
    if path.exists():
        log.warning("Removing stale staging directory %s", path)
        shutil.rmtree(path)


def delete_staging(
    game_dir: Path,
    layout: Optional[LayoutSection] = None,
    *,
    dry: bool = False,
) -> List[Path]:
    """Delete every leftover staging directory of *game_dir*.

    Args:
        game_dir: Game installation directory.
        layout: Optional layout override.
        dry: When *True* nothing is deleted.

    Returns:
        Directories whose removal succeeded; the staging root itself is
        included when it ended up empty and was removed too.
    """
    root = GamePaths.for_game(game_dir, layout).staging_dir
    if not root.is_dir():
        return []

    deleted: list[Path] = []
    for child in sorted(root.iterdir()):
        if child.is_dir() and _rm_dir(child, dry=dry):
            deleted.append(child)

    if not dry and not any(root.iterdir()):
        root.rmdir()
        deleted.append(root)
    return deleted


__all__ = ["clear_staging_dir", "delete_staging"]
