"""Helpers for resolving locations inside a game installation.

Every pipeline needs the same handful of paths (packed archive, its backup,
the unpacked data directory, the caption database and its backup, the
staging area).  :class:`GamePaths` derives all of them from the game
directory plus an optional :class:`~logrando.config.schema.LayoutSection`
so the naming rules live in exactly one place.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from logrando.config.schema import LayoutSection


def _rel(path: str) -> PurePosixPath:
    """Parse an installation-relative path written with either separator."""
    return PurePosixPath(path.replace("\\", "/"))


@dataclass(frozen=True)
class GamePaths:
    """Resolved locations for one installation.

    Attributes:
        game_dir: Installation root.
        layout: Naming rules the paths are derived from.
    """

    game_dir: Path
    layout: LayoutSection

    @classmethod
    def for_game(cls, game_dir: Path, layout: LayoutSection | None = None) -> "GamePaths":
        """Build paths for *game_dir*, falling back to the default layout."""
        return cls(Path(game_dir), layout or LayoutSection())

    def _backup_of(self, path: Path) -> Path:
        return path.with_name(path.name + self.layout.backup_suffix)

    @property
    def data_zip(self) -> Path:
        return self.game_dir.joinpath(*_rel(self.layout.data_archive).parts)

    @property
    def data_bak(self) -> Path:
        return self._backup_of(self.data_zip)

    @property
    def data_dir(self) -> Path:
        return self.game_dir.joinpath(*_rel(self.layout.data_dir).parts)

    @property
    def subtitles(self) -> Path:
        return self.game_dir.joinpath(*_rel(self.layout.subtitles).parts)

    @property
    def subtitles_bak(self) -> Path:
        return self._backup_of(self.subtitles)

    @property
    def staging_dir(self) -> Path:
        return self.game_dir.joinpath(*_rel(self.layout.staging_dir).parts)

    def asset(self, member_path: str | Path) -> Path:
        """Return the on-disk path of a loose asset below the data directory."""
        return self.data_dir.joinpath(*_rel(str(member_path)).parts)

    def package(self, container: Path) -> Path:
        """Return the on-disk path of a package below the data directory."""
        return self.asset(Path(container).as_posix())

    def package_staging(self, container: Path) -> Path:
        """Return the scratch directory a package is unpacked into while patched."""
        return self.staging_dir / Path(container).stem


__all__ = ["GamePaths"]
