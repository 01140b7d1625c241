"""Pytest configuration and shared fixtures for logrando tests.

The ``game_dir`` fixture builds a miniature installation with the same shape
as the real one: a ``data-pc.zip`` holding loose ``.sound`` files plus a
nested ``save_town.pkg`` package, and a CRLF caption database.
"""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest

from logrando.io.sound import encode
from logrando.models import Slot

CRLF = "\r\n"

#: Original caption records of the fake installation, in file order.
ORIGINAL_CAPTIONS = {
    "audio_log_tutorial_1": "Welcome: this is the first log.",
    "audio_log_town_1": "Town one, line one.\r\nTown one, line two.",
    "audio_log_town_2": "Town two.",
    "menu_title": "Not an audio log.",
}


def _zip_bytes(members: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return buf.getvalue()


def caption_db(records: dict[str, str]) -> str:
    """Return *records* rendered the way the game stores its caption file."""
    return "".join(f": {k}{CRLF}{CRLF}{v}{CRLF}{CRLF}{CRLF}" for k, v in records.items())


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """Return a freshly built fake installation (archive not yet unpacked)."""
    root = tmp_path / "game"
    package = _zip_bytes(
        {
            "audio_log_town_1.sound": encode(b"orig-town-1"),
            "audio_log_town_2.sound": encode(b"orig-town-2"),
            "town_ambience.sound": encode(b"ambience"),
        }
    )
    data = _zip_bytes(
        {
            "audio_log_tutorial_1.sound": encode(b"orig-tutorial-1"),
            "save_town.pkg": package,
            "textures/readme.txt": b"unrelated",
        }
    )
    root.mkdir()
    (root / "data-pc.zip").write_bytes(data)

    subs = root / "data" / "strings" / "en.subtitles"
    subs.parent.mkdir(parents=True)
    subs.write_bytes(caption_db(ORIGINAL_CAPTIONS).encode("utf-8"))
    return root


@pytest.fixture
def slots() -> tuple[Slot, ...]:
    """Three slots matching the fake installation (one loose, two packaged)."""
    return (
        Slot(package=None, filename="audio_log_tutorial_1.sound", subtitle="audio_log_tutorial_1"),
        Slot(package="save_town.pkg", filename="audio_log_town_1.sound", subtitle="audio_log_town_1"),
        Slot(package="save_town.pkg", filename="audio_log_town_2.sound", subtitle="audio_log_town_2"),
    )


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Candidate directory: three recordings, two of them with captions."""
    src = tmp_path / "recordings"
    src.mkdir()
    (src / "alpha.ogg").write_bytes(b"OggS-alpha")
    (src / "alpha.sub").write_text("Alpha caption\nsecond line\n", encoding="utf-8")
    (src / "bravo.ogg").write_bytes(b"OggS-bravo")
    (src / "charlie.ogg").write_bytes(b"OggS-charlie")
    (src / "charlie.sub").write_text("Charlie caption", encoding="utf-8")
    (src / "notes.txt").write_text("ignored", encoding="utf-8")
    (src / "nested").mkdir()
    (src / "nested" / "deep.ogg").write_bytes(b"OggS-deep")
    return src


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep log files and settings lookups inside the test's temp directory."""
    monkeypatch.setenv("LOGRANDO_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("LOGRANDO_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
