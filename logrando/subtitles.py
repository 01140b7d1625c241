"""
Reader and writer for the game's caption database (``en.subtitles``).

File format
-----------
A flat UTF-8 text file made of records.  Each record starts with a line that
begins with ``:`` followed by the record key; everything up to the next
such line is the caption text::

    : audio_log_town_1

    First line of the caption.
    Second line.


    : audio_log_town_2
    ...

Parsing splits only at colons that *begin* a line, so captions may contain
colons anywhere else.  Either line-ending convention is accepted on input.

The game is picky about line endings on output: every line written by
:func:`compile_subtitles` ends in ``\\r\\n`` regardless of the host platform,
and embedded line breaks are normalised the same way.  Writing a mix of
endings corrupts the file after a couple of randomizations.
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Optional, TextIO

from logrando.config.schema import LayoutSection
from logrando.models import Subtitle
from logrando.utils.errors import MalformedSubtitleError
from logrando.utils.paths import GamePaths

log = logging.getLogger(__name__)

CRLF = "\r\n"

_RECORD_START = re.compile(r"^:", re.MULTILINE)
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


# ---------------------------------------------------------------------------
# parsing
# ---------------------------------------------------------------------------
def parse_subtitles(text: str) -> list[Subtitle]:
    """Split *text* into ordered :class:`Subtitle` records.

    Whitespace-only chunks (the text before the very first record) are
    dropped.  Key and value are stripped; the value keeps its inner line
    breaks and blank lines.

    Raises:
        MalformedSubtitleError: If a non-empty chunk has no line break, i.e.
            a key without a caption body.
    """
    records: list[Subtitle] = []
    for chunk in _RECORD_START.split(text):
        if not chunk.strip():
            continue
        parts = _LINE_BREAK.split(chunk, maxsplit=1)
        if len(parts) != 2:
            log.error("Malformed subtitle chunk: %r", chunk)
            raise MalformedSubtitleError(f"malformed subtitle chunk: {chunk!r}")
        key, val = parts
        records.append(Subtitle(key=key.strip(), val=val.strip()))
    return records


def load_subtitles(game_dir: Path, layout: Optional[LayoutSection] = None) -> list[Subtitle]:
    """Read and parse the live caption database of *game_dir*."""
    path = GamePaths.for_game(game_dir, layout).subtitles
    with path.open("r", encoding="utf-8", newline="") as fh:
        return parse_subtitles(fh.read())


# ---------------------------------------------------------------------------
# compiling
# ---------------------------------------------------------------------------
def _crlf_lines(text: str) -> str:
    """Return *text* with every line break rewritten as ``\\r\\n``."""
    return CRLF.join(_LINE_BREAK.split(text))


def _read_caption(path: Path) -> Optional[str]:
    """Return the caption stored in *path*, or *None* when it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8").rstrip("\r\n")
    except (OSError, UnicodeDecodeError) as err:
        log.error("Could not read subs file %s – %s", path, err)
        return None


def compile_subtitles(
    subtitles: Iterable[Subtitle],
    insertions: Mapping[str, Optional[Path]],
    out: TextIO,
) -> list[Path]:
    """Write *subtitles* to *out* in their original order.

    For every record the caption body is chosen as follows:

    * key absent from *insertions* → the original value;
    * key mapped to a path → the contents of that caption file;
    * key mapped to *None* → an empty caption.

    A caption file that cannot be read is logged and replaced by an empty
    caption; the remaining records are still written.

    Args:
        subtitles: Records in file order.
        insertions: Subtitle insertion mapping from an
            :class:`~logrando.models.InsertionPlan`.
        out: Text stream.  Open files with ``newline=""`` so the ``\\r\\n``
            endings are written untouched.

    Returns:
        Caption files that could not be read (empty when all succeeded).
    """
    failed: list[Path] = []
    for sub in subtitles:
        if sub.key not in insertions:
            body = sub.val
        else:
            caption_path = insertions[sub.key]
            if caption_path is None:
                body = ""
            else:
                text = _read_caption(caption_path)
                if text is None:
                    failed.append(Path(caption_path))
                    text = ""
                body = text

        out.write(f": {sub.key}{CRLF}")
        out.write(CRLF)
        out.write(_crlf_lines(body) + CRLF)
        out.write(CRLF)
        out.write(CRLF)
    return failed


def render_subtitles(
    subtitles: Iterable[Subtitle],
    insertions: Mapping[str, Optional[Path]],
) -> tuple[str, list[Path]]:
    """In-memory variant of :func:`compile_subtitles`."""
    buf = io.StringIO(newline="")
    failed = compile_subtitles(subtitles, insertions, buf)
    return buf.getvalue(), failed


def insert_subtitles(
    game_dir: Path,
    subtitles: Iterable[Subtitle],
    insertions: Mapping[str, Optional[Path]],
    layout: Optional[LayoutSection] = None,
) -> list[Path]:
    """Rewrite the live caption database of *game_dir*.

    The whole file is rendered in memory before the live file is opened, so a
    failure while compiling never leaves a truncated database behind.

    Returns:
        Caption files that could not be read (see :func:`compile_subtitles`).
    """
    path = GamePaths.for_game(game_dir, layout).subtitles
    text, failed = render_subtitles(subtitles, insertions)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    log.info("Wrote %s (%d unreadable caption file(s))", path, len(failed))
    return failed


__all__ = [
    "compile_subtitles",
    "insert_subtitles",
    "load_subtitles",
    "parse_subtitles",
    "render_subtitles",
]
