from pathlib import Path

import pytest

from logrando.pipelines.backup import (
    backup_data,
    backup_subtitles,
    check_game_dir,
    ensure_backups,
    inspect,
    restore_backups,
    restore_data,
    restore_subtitles,
    unpack_data,
)
from logrando.utils.errors import BackupMissingError, InstallationError
from logrando.utils.paths import GamePaths


def test_inspect_fresh_installation(game_dir: Path) -> None:
    state = inspect(game_dir)
    assert state.needs_unpack
    assert state.needs_archive_backup
    assert state.needs_caption_backup
    assert not state.is_backed_up


def test_ensure_backups_applies_all_gates(game_dir: Path) -> None:
    """The archive is unpacked, then moved aside; captions are copied."""
    paths = GamePaths.for_game(game_dir)
    original_zip = paths.data_zip.read_bytes()
    original_subs = paths.subtitles.read_bytes()

    res = ensure_backups(game_dir)

    assert res.unpacked and res.archive_backed_up and res.captions_backed_up
    assert not paths.data_zip.exists()
    assert paths.data_bak.read_bytes() == original_zip
    assert paths.subtitles_bak.read_bytes() == original_subs
    assert (paths.data_dir / "save_town.pkg").is_file()
    assert (paths.data_dir / "audio_log_tutorial_1.sound").is_file()
    assert inspect(game_dir).is_backed_up


def test_ensure_backups_is_idempotent(game_dir: Path) -> None:
    """A second run changes nothing and never overwrites a backup."""
    paths = GamePaths.for_game(game_dir)
    ensure_backups(game_dir)
    bak_bytes = paths.data_bak.read_bytes()
    subs_bak_bytes = paths.subtitles_bak.read_bytes()

    paths.subtitles.write_text("modified", encoding="utf-8")
    again = ensure_backups(game_dir)

    assert not again.changed
    assert paths.data_bak.read_bytes() == bak_bytes
    assert paths.subtitles_bak.read_bytes() == subs_bak_bytes
    assert sorted(p.name for p in game_dir.glob("*.bak")) == ["data-pc.zip.bak"]


def test_archive_gate_twice_leaves_single_backup(game_dir: Path) -> None:
    paths = GamePaths.for_game(game_dir)
    assert unpack_data(game_dir)
    assert backup_data(game_dir)
    first = paths.data_bak.read_bytes()
    assert not backup_data(game_dir)
    assert not unpack_data(game_dir)
    assert paths.data_bak.read_bytes() == first
    assert list(game_dir.glob("*.bak")) == [paths.data_bak]


def test_gates_skip_when_archive_already_unpacked(game_dir: Path) -> None:
    """With a data directory present the unpack gate stays closed."""
    paths = GamePaths.for_game(game_dir)
    paths.data_dir.mkdir()
    (paths.data_dir / "marker").write_text("keep")

    res = ensure_backups(game_dir)

    assert not res.unpacked
    assert res.archive_backed_up
    assert (paths.data_dir / "marker").read_text() == "keep"


def test_caption_gate_without_caption_file(game_dir: Path) -> None:
    GamePaths.for_game(game_dir).subtitles.unlink()
    assert not inspect(game_dir).needs_caption_backup
    assert not backup_subtitles(game_dir)


def test_ensure_backups_rejects_non_installation(tmp_path: Path) -> None:
    assert not check_game_dir(tmp_path)
    with pytest.raises(InstallationError):
        ensure_backups(tmp_path)


def test_restore_round_trip(game_dir: Path) -> None:
    """Restoring brings back the original data tree and caption file."""
    paths = GamePaths.for_game(game_dir)
    original_subs = paths.subtitles.read_bytes()
    ensure_backups(game_dir)

    (paths.data_dir / "audio_log_tutorial_1.sound").write_bytes(b"tampered")
    (paths.data_dir / "extra.sound").write_bytes(b"new file")
    paths.subtitles.write_text("tampered", encoding="utf-8")

    res = restore_backups(game_dir)

    assert res.ok
    assert res.subtitles_restored and res.data_restored
    assert paths.subtitles.read_bytes() == original_subs
    assert not (paths.data_dir / "extra.sound").exists()
    assert (paths.data_dir / "audio_log_tutorial_1.sound").read_bytes() != b"tampered"
    assert paths.data_bak.exists() and paths.subtitles_bak.exists()

    assert restore_backups(game_dir).ok


def test_restore_data_without_backup(game_dir: Path) -> None:
    with pytest.raises(BackupMissingError):
        restore_data(game_dir)


def test_restore_subtitles_without_backup(game_dir: Path) -> None:
    with pytest.raises(FileNotFoundError):
        restore_subtitles(game_dir)


def test_restore_backups_continues_after_failure(game_dir: Path) -> None:
    """Caption restore still happens when the data backup is missing."""
    paths = GamePaths.for_game(game_dir)
    backup_subtitles(game_dir)
    paths.subtitles.write_text("tampered", encoding="utf-8")

    res = restore_backups(game_dir)

    assert res.subtitles_restored
    assert not res.data_restored
    assert not res.ok
    assert len(res.errors) == 1 and res.errors[0].startswith("data:")
    assert paths.subtitles.read_bytes() == paths.subtitles_bak.read_bytes()
