"""
Pydantic models that mirror the YAML settings consumed by *logrando*.

The classes give the rest of the codebase validated objects instead of
ad-hoc dictionaries.  Every section has defaults matching a stock Windows
install of the game, so an empty YAML document is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

# --------------------------------------------------------------------------- #
# 1.  Leaf sections                                                           #
# --------------------------------------------------------------------------- #


class LayoutSection(BaseModel):
    """Installation-relative locations of the mutable game data.

    Attributes:
        data_archive: Packed data archive shipped with the game.
        data_dir: Directory the archive is unpacked into.  Once it exists the
            game reads assets from here instead of the archive.
        subtitles: Caption database, relative to the game directory.
        staging_dir: Scratch directory used while repacking sound packages.
        backup_suffix: Suffix appended to create backup siblings.
    """

    data_archive: str = "data-pc.zip"
    data_dir: str = "data-pc"
    subtitles: str = "data/strings/en.subtitles"
    staging_dir: str = "tmp"
    backup_suffix: str = ".bak"

    @field_validator("backup_suffix")
    @classmethod
    def _suffix_has_dot(cls, value: str) -> str:
        """Reject suffixes that would not produce a sibling file name."""
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("backup_suffix must start with '.' and name a suffix")
        return value


class ExtensionSection(BaseModel):
    """File extensions used for discovery and for dumped output.

    Attributes:
        audio: Extension of plain audio candidates.
        caption: Extension of caption text files next to candidates.
        sound: Extension of the game's sound containers.
    """

    audio: str = ".ogg"
    caption: str = ".sub"
    sound: str = ".sound"

    @field_validator("audio", "caption", "sound")
    @classmethod
    def _leading_dot(cls, value: str) -> str:
        """Accept ``ogg`` as well as ``.ogg``."""
        value = value.strip()
        return value if value.startswith(".") else f".{value}"


# --------------------------------------------------------------------------- #
# 2.  Top-level model                                                         #
# --------------------------------------------------------------------------- #


class ConfigSchema(BaseModel):
    """Root configuration object consumed by the rest of *logrando*.

    Attributes:
        version: Version string of the settings schema.
        game_dir: Game installation directory.
        source_dir: Directory scanned for replacement recordings.
        log_dir: Directory for the rotating log file (optional).
        catalog: Replacement slot catalog; the packaged one is used when
            unset.
        strict_headers: Validate sound container headers when decoding.
        layout: Installation layout.
        extensions: Candidate / output file extensions.
    """

    version: str = "1.0"
    game_dir: Path = Path("C:/Program Files/Steam/steamapps/common/The Witness")
    source_dir: Path = Path(".")
    log_dir: Optional[Path] = None
    catalog: Optional[Path] = None
    strict_headers: bool = False
    layout: LayoutSection = Field(default_factory=LayoutSection)
    extensions: ExtensionSection = Field(default_factory=ExtensionSection)
