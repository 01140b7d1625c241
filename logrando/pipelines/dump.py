"""
Export the game's audio logs as plain recordings plus caption files.

For every catalog slot the sound container is decoded into
``<dest>/<member stem>.ogg`` and the slot's caption is written next to it as
``<dest>/<member stem>.sub``.  The output directory therefore has exactly
the shape :func:`logrando.pipelines.randomize.discover_candidates` expects,
which makes a dump of one installation a ready-made candidate pool.

Packaged slots are pulled out with
:func:`~logrando.utils.archive.extract_one` rather than by unpacking the
whole package.  Failures are recorded per slot and do not stop the dump.
"""

from __future__ import annotations

import logging
import tempfile
import zipfile
from pathlib import Path
from typing import Optional, Sequence

from logrando.catalog import load_catalog
from logrando.config.schema import ExtensionSection, LayoutSection
from logrando.io.sound import sound_to_audio
from logrando.models import Container, Slot, Subtitle
from logrando.subtitles import CRLF, load_subtitles
from logrando.utils.archive import extract_one, looks_like_archive
from logrando.utils.errors import LograndoError
from logrando.utils.paths import GamePaths

from .types import DumpResult

log = logging.getLogger(__name__)


def _dump_slot(
    slot: Slot,
    paths: GamePaths,
    dest_dir: Path,
    extensions: ExtensionSection,
    *,
    strict: bool,
) -> Path:
    """Decode *slot* into *dest_dir* and return the written audio path."""
    name = Path(slot.member_path).name
    stem = name[: -len(extensions.sound)] if name.endswith(extensions.sound) else Path(name).stem
    audio_out = dest_dir / f"{stem}{extensions.audio}"
    destination = slot.destination

    if isinstance(destination, Container):
        package = paths.package(destination.path)
        if not looks_like_archive(package):
            raise FileNotFoundError(f"package {package} does not exist")
        with tempfile.TemporaryDirectory(dir=dest_dir) as scratch:
            extracted = extract_one(package, slot.member_path, Path(scratch))
            if extracted is None:
                raise FileNotFoundError(f"{slot.member_path} is not a member of {package}")
            sound_to_audio(extracted, audio_out, strict=strict)
    else:
        sound_to_audio(paths.asset(slot.member_path), audio_out, strict=strict)

    return audio_out


def dump_logs(
    game_dir: Path,
    dest_dir: Path,
    *,
    slots: Optional[Sequence[Slot]] = None,
    subtitles: Optional[Sequence[Subtitle]] = None,
    layout: Optional[LayoutSection] = None,
    extensions: Optional[ExtensionSection] = None,
    strict: bool = False,
) -> DumpResult:
    """Decode every catalog slot of *game_dir* into *dest_dir*.

    Args:
        game_dir: Game installation directory; its data directory must exist.
        dest_dir: Output directory, created when missing.
        slots: Slot list; the packaged catalog when *None*.
        subtitles: Caption records; read from the installation when *None*.
        layout: Optional layout override.
        extensions: Output file extensions.
        strict: Validate sound container headers while decoding.

    Returns:
        :class:`DumpResult` listing written recordings and per-slot errors.

    Raises:
        MalformedSubtitleError: If the caption database cannot be parsed.
        OSError: If the caption database cannot be read.
    """
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)
    paths = GamePaths.for_game(game_dir, layout)
    extensions = extensions or ExtensionSection()

    slot_list = list(load_catalog() if slots is None else slots)
    if subtitles is None:
        subtitles = load_subtitles(game_dir, layout)
    captions = {sub.key: sub.val for sub in subtitles}

    dumped: list[Path] = []
    errors: list[str] = []
    for slot in slot_list:
        if slot.subtitle_key not in captions:
            log.error("No subtitle %r for %s", slot.subtitle_key, slot.member_path)
            errors.append(f"{slot.member_path}: no subtitle {slot.subtitle_key!r}")
            continue
        try:
            audio_out = _dump_slot(slot, paths, dest_dir, extensions, strict=strict)
        except (OSError, LograndoError, zipfile.BadZipFile) as exc:
            log.error("Error dumping %s: %s", slot.member_path, exc)
            errors.append(f"{slot.member_path}: {exc}")
            continue

        caption_out = audio_out.with_suffix(extensions.caption)
        with caption_out.open("w", encoding="utf-8", newline="") as fh:
            fh.write(CRLF.join(captions[slot.subtitle_key].splitlines()))
        dumped.append(audio_out)

    log.info("Dumped %d audio log(s) to %s", len(dumped), dest_dir)
    return DumpResult(dest_dir=dest_dir, dumped=dumped, errors=errors)


__all__ = ["dump_logs"]
