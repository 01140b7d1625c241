"""
Typed, immutable report objects returned by the pipeline entry points.

Every class inherits from :class:`pydantic.BaseModel` with ``frozen=True`` so
reports can be passed around (or logged) without fear of mutation.  Multi-item
operations keep going after a per-item failure; these objects are where the
failures end up so the caller can surface an aggregate count.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class BackupResult(BaseModel, frozen=True):
    """Summary returned by :pyfunc:`logrando.pipelines.backup.ensure_backups`.

    Attributes
    ----------
    game_dir
        Installation the gates were evaluated against.
    unpacked
        *True* when this call unpacked the data archive.
    archive_backed_up
        *True* when this call renamed the data archive to its backup.
    captions_backed_up
        *True* when this call copied the caption database to its backup.
    """

    game_dir: Path
    unpacked: bool = False
    archive_backed_up: bool = False
    captions_backed_up: bool = False

    @property
    def changed(self) -> bool:
        return self.unpacked or self.archive_backed_up or self.captions_backed_up


class RestoreResult(BaseModel, frozen=True):
    """Summary returned by :pyfunc:`logrando.pipelines.backup.restore_backups`.

    ``errors`` holds one human-readable message per failed step.
    """

    game_dir: Path
    subtitles_restored: bool = False
    data_restored: bool = False
    errors: list[str] = []

    @property
    def ok(self) -> bool:
        return not self.errors


class InsertResult(BaseModel, frozen=True):
    """Summary returned by :pyfunc:`logrando.pipelines.insert.apply_plan`.

    Attributes
    ----------
    inserted
        Destination member paths that now hold a new recording.
    errors
        One message per failed member, package or caption write.
    unreadable_captions
        Caption files that could not be read; their slots were given an
        empty caption instead.
    """

    inserted: list[str] = []
    errors: list[str] = []
    unreadable_captions: list[Path] = []

    @property
    def error_count(self) -> int:
        return len(self.errors)


class DumpResult(BaseModel, frozen=True):
    """Summary returned by :pyfunc:`logrando.pipelines.dump.dump_logs`."""

    dest_dir: Path
    dumped: list[Path] = []
    errors: list[str] = []

    @property
    def error_count(self) -> int:
        return len(self.errors)


class RandomizeResult(BaseModel, frozen=True):
    """Summary returned by :pyfunc:`logrando.pipelines.randomize.run_randomizer`."""

    seed_text: str
    seed: int
    candidates: int
    slots: int
    backup: BackupResult
    insert: InsertResult

    @property
    def error_count(self) -> int:
        return self.insert.error_count
