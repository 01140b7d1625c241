"""
Domain-level data models shared across I/O, pipeline, and CLI layers.

The module provides:

* **Destination** – tagged union telling whether a slot lives as a loose
  file in the asset root (:class:`Loose`) or inside a sound package
  (:class:`Container`).  Every call-site that needs a slot location uses
  this type; there is no ``None``-means-loose shortcut.
* **Slot** / **Candidate** – the two sides of the pairing performed by the
  randomizer.
* **InsertionPlan** – the randomizer's output, consumed by the insertion
  pipeline.
* **Subtitle** / **InstallationState** – small transport objects.

All pydantic models are frozen so they are hashable and cannot drift once
built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# --------------------------------------------------------------------------- #
# 1 – destinations
# --------------------------------------------------------------------------- #


class Loose(BaseModel, frozen=True):
    """Slot stored as a plain file below the unpacked data directory."""

    kind: Literal["loose"] = "loose"

    @property
    def label(self) -> str:
        return "<loose>"


class Container(BaseModel, frozen=True):
    """Slot stored as a member of a package relative to the data directory."""

    kind: Literal["container"] = "container"
    path: Path

    @property
    def label(self) -> str:
        return self.path.as_posix()


Destination = Annotated[Union[Loose, Container], Field(discriminator="kind")]

#: Shared instance for loose slots.
LOOSE = Loose()


# --------------------------------------------------------------------------- #
# 2 – catalog slots and discovered candidates
# --------------------------------------------------------------------------- #


class Slot(BaseModel):
    """One replaceable audio position described by the catalog.

    The JSON catalog uses the keys ``package``, ``filename`` and
    ``subtitle``; they are accepted as aliases of the field names below.

    Attributes:
        container: Package path relative to the data directory, or *None*
            for loose files.
        member_path: Entry name of the ``.sound`` file inside the package (or
            path below the data directory).  Kept as ``str`` so package
            lookups compare the stored name verbatim.
        subtitle_key: Key of the caption record in the subtitle database.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    container: Optional[Path] = Field(None, alias="package")
    member_path: str = Field(..., alias="filename", min_length=1)
    subtitle_key: str = Field(..., alias="subtitle")

    @property
    def destination(self) -> Union[Loose, Container]:
        """Return the tagged location of this slot."""
        if self.container is None:
            return LOOSE
        return Container(path=self.container)


class Candidate(BaseModel, frozen=True):
    """A user-supplied recording eligible for insertion.

    Attributes:
        audio_path: Plain audio file (``.ogg``).
        caption_path: Sibling caption file with the same stem, when one
            existed at discovery time.
    """

    audio_path: Path
    caption_path: Optional[Path] = None


class SoundInsertion(BaseModel, frozen=True):
    """Single *source audio → destination member* pair."""

    source_file: Path
    dest_file: str


# --------------------------------------------------------------------------- #
# 3 – randomizer output
# --------------------------------------------------------------------------- #

SoundInsertionMap = dict[Union[Loose, Container], list[SoundInsertion]]
SubtitleInsertionMap = dict[str, Optional[Path]]


@dataclass(frozen=True)
class InsertionPlan:
    """Pairing produced by one randomization run.

    ``sound_insertions`` groups the audio swaps by destination so each
    package is unpacked and repacked exactly once.  ``subtitle_insertions``
    maps every affected caption key to the candidate's caption file, or to
    *None* when the candidate had none (the caption is then blanked).  Keys
    absent from the mapping keep their original caption.
    """

    sound_insertions: SoundInsertionMap = field(default_factory=dict)
    subtitle_insertions: SubtitleInsertionMap = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.sound_insertions and not self.subtitle_insertions

    @property
    def slot_count(self) -> int:
        """Number of slots that receive a new recording."""
        return sum(len(v) for v in self.sound_insertions.values())


# --------------------------------------------------------------------------- #
# 4 – subtitles and installation state
# --------------------------------------------------------------------------- #


class Subtitle(BaseModel, frozen=True):
    """One caption record: ``key`` is unique, ``val`` may span several lines."""

    key: str
    val: str = ""


class InstallationState(BaseModel, frozen=True):
    """Snapshot of which backup gates still need applying.

    Computed on demand by :func:`logrando.pipelines.backup.inspect`; never
    cached because the filesystem can change between two checks.
    """

    needs_unpack: bool
    needs_archive_backup: bool
    needs_caption_backup: bool

    @property
    def is_backed_up(self) -> bool:
        return not (
            self.needs_unpack or self.needs_archive_backup or self.needs_caption_backup
        )


__all__ = [
    "LOOSE",
    "Candidate",
    "Container",
    "Destination",
    "InsertionPlan",
    "InstallationState",
    "Loose",
    "Slot",
    "SoundInsertion",
    "SoundInsertionMap",
    "Subtitle",
    "SubtitleInsertionMap",
]
