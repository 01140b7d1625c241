"""
Apply an :class:`~logrando.models.InsertionPlan` to a game installation.

Loose slots are overwritten in place below the unpacked data directory.
Packaged slots go through an unpack → replace → repack cycle:

1. the package is unpacked into ``<staging>/<package stem>``;
2. each destination member is overwritten with the encoded recording;
3. the staging tree is packed into ``<package>.partial`` which then
   atomically replaces the package;
4. the staging tree is removed.

The package on disk is only touched in step 3, so an interruption leaves it
intact; at worst a staging directory remains (see
:mod:`logrando.utils.cleanup`).

Failures are isolated per member and per package: processing continues and
every failure is recorded in the returned
:class:`~logrando.pipelines.types.InsertResult`.
"""

from __future__ import annotations

import logging
import os
import shutil
import zipfile
from pathlib import Path
from typing import Optional, Sequence, Union

from logrando.config.schema import LayoutSection
from logrando.io.sound import audio_to_sound
from logrando.models import Container, InsertionPlan, Loose, SoundInsertion, Subtitle
from logrando.subtitles import insert_subtitles, load_subtitles
from logrando.utils.archive import pack, unpack
from logrando.utils.cleanup import clear_staging_dir
from logrando.utils.errors import SoundFormatError
from logrando.utils.paths import GamePaths

from .types import InsertResult

log = logging.getLogger(__name__)

# Per-item failures that are recorded instead of aborting the run.
_ITEM_ERRORS = (OSError, SoundFormatError, zipfile.BadZipFile)


# ---------------------------------------------------------------------------
# 1 – loose files
# ---------------------------------------------------------------------------


def _insert_loose(
    insertions: Sequence[SoundInsertion],
    paths: GamePaths,
) -> tuple[list[str], list[str]]:
    inserted: list[str] = []
    errors: list[str] = []
    for ins in insertions:
        target = paths.asset(ins.dest_file)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            audio_to_sound(ins.source_file, target)
        except _ITEM_ERRORS as exc:
            log.error("Sound insertion failed for %s: %s", ins.dest_file, exc)
            errors.append(f"{ins.dest_file}: {exc}")
            continue
        inserted.append(ins.dest_file)
    return inserted, errors


# ---------------------------------------------------------------------------
# 2 – packaged files
# ---------------------------------------------------------------------------


def _replace_members(
    insertions: Sequence[SoundInsertion],
    staging: Path,
    label: str,
) -> tuple[list[str], list[str]]:
    """Overwrite the members of an unpacked package held in *staging*."""
    inserted: list[str] = []
    errors: list[str] = []
    for ins in insertions:
        member = staging / ins.dest_file
        try:
            if not member.is_file():
                raise FileNotFoundError(f"{ins.dest_file} is not a member of {label}")
            audio_to_sound(ins.source_file, member)
        except _ITEM_ERRORS as exc:
            log.error("Sound insertion failed for %s in %s: %s", ins.dest_file, label, exc)
            errors.append(f"{label}/{ins.dest_file}: {exc}")
            continue
        inserted.append(ins.dest_file)
    return inserted, errors


def _insert_packaged(
    insertions: Sequence[SoundInsertion],
    container: Container,
    paths: GamePaths,
) -> tuple[list[str], list[str]]:
    package = paths.package(container.path)
    staging = paths.package_staging(container.path)
    partial = package.with_name(package.name + ".partial")

    try:
        clear_staging_dir(staging)
        unpack(package, staging)
    except _ITEM_ERRORS as exc:
        log.error("Could not unpack %s: %s", package, exc)
        return [], [f"{container.label}/{ins.dest_file}: {exc}" for ins in insertions]

    inserted, errors = _replace_members(insertions, staging, container.label)
    if not inserted:
        shutil.rmtree(staging, ignore_errors=True)
        return inserted, errors

    try:
        pack(staging, partial)
        os.replace(partial, package)
    except _ITEM_ERRORS as exc:
        log.error("Could not repack %s: %s", package, exc)
        partial.unlink(missing_ok=True)
        failed = [f"{container.label}/{name}: repack failed – {exc}" for name in inserted]
        return [], errors + failed

    shutil.rmtree(staging, ignore_errors=True)
    log.info("Patched %d member(s) of %s", len(inserted), package)
    return inserted, errors


def insert_sound_files(
    insertions: Sequence[SoundInsertion],
    destination: Union[Loose, Container],
    game_dir: Path,
    layout: Optional[LayoutSection] = None,
) -> tuple[list[str], list[str]]:
    """Write *insertions* into *destination* and return ``(inserted, errors)``."""
    paths = GamePaths.for_game(game_dir, layout)
    if isinstance(destination, Container):
        return _insert_packaged(insertions, destination, paths)
    return _insert_loose(insertions, paths)


# ---------------------------------------------------------------------------
# 3 – whole plan
# ---------------------------------------------------------------------------


def apply_plan(
    plan: InsertionPlan,
    game_dir: Path,
    *,
    layout: Optional[LayoutSection] = None,
    subtitles: Optional[Sequence[Subtitle]] = None,
) -> InsertResult:
    """Apply every sound and caption insertion of *plan* to *game_dir*.

    The caption database is parsed *before* any audio is touched, so a
    malformed or missing database aborts the run without side effects.

    Args:
        plan: Output of :func:`logrando.pipelines.randomize.randomize`.
        game_dir: Game installation directory (backups already ensured).
        layout: Optional layout override.
        subtitles: Pre-parsed caption records; read from *game_dir* when
            *None*.

    Returns:
        :class:`InsertResult` with inserted members and per-item errors.

    Raises:
        MalformedSubtitleError: If the caption database cannot be parsed.
        OSError: If the caption database cannot be read.
    """
    if plan.is_empty:
        log.info("Nothing to insert")
        return InsertResult()

    if subtitles is None:
        subtitles = load_subtitles(game_dir, layout)

    inserted: list[str] = []
    errors: list[str] = []

    for destination in sorted(plan.sound_insertions, key=lambda d: (d.kind, d.label)):
        log.info("Randomizing logs in %s", destination.label)
        ok, failed = insert_sound_files(
            plan.sound_insertions[destination], destination, game_dir, layout
        )
        inserted.extend(ok)
        errors.extend(failed)

    unreadable: list[Path] = []
    try:
        unreadable = insert_subtitles(game_dir, subtitles, plan.subtitle_insertions, layout)
    except OSError as exc:
        log.error("Could not write subtitles: %s", exc)
        errors.append(f"subtitles: {exc}")

    return InsertResult(inserted=inserted, errors=errors, unreadable_captions=unreadable)


__all__ = ["apply_plan", "insert_sound_files"]
