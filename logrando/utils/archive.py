"""
ZIP helpers for the game's data archive and its nested sound packages.

Both the top-level ``data-pc.zip`` and the ``*.pkg`` packages it contains
are ordinary ZIP files.  The randomizer never edits a ZIP in place: it
unpacks, swaps members on disk and packs a fresh archive.  This module
contains the three primitives that workflow needs:

* :func:`unpack` – extract every entry, refusing names that would escape
  the destination directory.
* :func:`extract_one` – copy a single member out by its verbatim name.
* :func:`pack` – write a directory tree back as an uncompressed archive.

:func:`pack` sorts entries by relative path and stamps a fixed timestamp, so
packing the same tree twice yields byte-identical archives on every
platform.
"""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path, PurePosixPath, PureWindowsPath

log = logging.getLogger(__name__)

#: Recognised package endings.  The game ships ZIP data under both names.
_ARCHIVE_SUFFIXES: tuple[str, ...] = (
    ".zip",
    ".pkg",
)

#: Permission bits stored on every packed entry.
_UNIX_MODE = 0o755

#: ZIP cannot represent dates before 1980; a fixed stamp keeps output stable.
_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def looks_like_archive(path: Path) -> bool:
    """Return *True* when *path* is a file with a recognised package suffix.

        >>> looks_like_archive(Path("does-not-exist.pkg"))
        False
    """
    if not path.is_file():
        return False
    lower_name = path.name.lower()
    return any(lower_name.endswith(suf) for suf in _ARCHIVE_SUFFIXES)


# ---------------------------------------------------------------------------
# 0 – entry-name sanitising
# ---------------------------------------------------------------------------


def _enclosed_name(name: str) -> PurePosixPath | None:
    """Return *name* as a relative path, or *None* when it escapes its root.

    Absolute names, drive-qualified names and names whose ``..`` components
    climb above the archive root are rejected.
    """
    if not name or "\x00" in name:
        return None
    if name.startswith(("/", "\\")) or PureWindowsPath(name).drive:
        return None

    depth = 0
    parts: list[str] = []
    for part in PurePosixPath(name.replace("\\", "/")).parts:
        if part == "..":
            depth -= 1
            if depth < 0:
                return None
            parts.pop()
        elif part != ".":
            depth += 1
            parts.append(part)
    if not parts:
        return None
    return PurePosixPath(*parts)


# ---------------------------------------------------------------------------
# 1 – extraction
# ---------------------------------------------------------------------------


def unpack(archive: Path, dest_dir: Path) -> Path:
    """Extract every entry of *archive* below *dest_dir*.

    Directory entries (names ending in ``/``) are created even when empty.
    Entries whose name would land outside *dest_dir* are skipped silently
    apart from a DEBUG breadcrumb.

    Args:
        archive: ZIP file to read.
        dest_dir: Target directory, created when missing.

    Returns:
        *dest_dir*, for call chaining.

    Raises:
        OSError: Any filesystem failure while reading or writing.
        zipfile.BadZipFile: If *archive* is not a ZIP file.
    """
    archive = Path(archive)
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            rel = _enclosed_name(info.filename)
            if rel is None:
                log.debug("Skipping unsafe entry %r in %s", info.filename, archive)
                continue

            out_path = dest_dir.joinpath(*rel.parts)
            if info.filename.endswith("/"):
                out_path.mkdir(parents=True, exist_ok=True)
                continue

            out_path.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, out_path.open("wb") as dst:
                shutil.copyfileobj(src, dst)

    log.info("Unpacked %s → %s", archive, dest_dir)
    return dest_dir


def extract_one(archive: Path, member_path: str, dest_dir: Path) -> Path | None:
    """Copy the member stored exactly as *member_path* into *dest_dir*.

    The comparison is a verbatim string match against the stored entry name;
    no separator or case normalisation takes place.  When no entry matches
    the call is a no-op and returns *None*, so callers must check the result
    (or the filesystem) before relying on the output file.

    Returns:
        Path of the written file, or *None* when *archive* has no such member.
    """
    archive = Path(archive)
    dest_dir = Path(dest_dir)

    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            if info.filename != member_path:
                continue
            out_path = dest_dir / member_path
            out_path.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, out_path.open("wb") as dst:
                shutil.copyfileobj(src, dst)
            log.debug("Extracted %s from %s", member_path, archive)
            return out_path

    log.debug("No member %r in %s", member_path, archive)
    return None


# ---------------------------------------------------------------------------
# 2 – packing
# ---------------------------------------------------------------------------


def _entry_info(name: str, *, is_dir: bool) -> zipfile.ZipInfo:
    """Return a :class:`zipfile.ZipInfo` with stored compression and fixed metadata."""
    info = zipfile.ZipInfo(name + "/" if is_dir else name, date_time=_FIXED_DATE_TIME)
    info.compress_type = zipfile.ZIP_STORED
    info.create_system = 3  # unix, so external_attr carries the mode bits
    if is_dir:
        info.external_attr = ((0o040000 | _UNIX_MODE) << 16) | 0x10
    else:
        info.external_attr = (0o100000 | _UNIX_MODE) << 16
    return info


def pack(source_dir: Path, dest_archive: Path) -> Path:
    """Write every file and sub-directory of *source_dir* into *dest_archive*.

    Entry names are POSIX paths relative to *source_dir*; the root itself is
    not written.  Entries are emitted in sorted order of their relative path.

    Returns:
        *dest_archive*.
    """
    source_dir = Path(source_dir)
    dest_archive = Path(dest_archive)

    entries = sorted(
        source_dir.rglob("*"),
        key=lambda p: p.relative_to(source_dir).as_posix(),
    )

    with zipfile.ZipFile(dest_archive, "w", compression=zipfile.ZIP_STORED) as zf:
        for path in entries:
            name = path.relative_to(source_dir).as_posix()
            if path.is_dir():
                zf.writestr(_entry_info(name, is_dir=True), b"")
            elif path.is_file():
                info = _entry_info(name, is_dir=False)
                info.file_size = path.stat().st_size
                with path.open("rb") as src, zf.open(info, "w") as dst:
                    shutil.copyfileobj(src, dst)

    log.info("Packed %d entr(y/ies) from %s → %s", len(entries), source_dir, dest_archive)
    return dest_archive


__all__ = ["extract_one", "looks_like_archive", "pack", "unpack"]
