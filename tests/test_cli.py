import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from logrando.cli import main as cli_main
from logrando.utils.paths import GamePaths


@pytest.fixture
def catalog_file(tmp_path: Path, slots) -> Path:
    """Write the fixture slots as a catalog file the CLI can load."""
    path = tmp_path / "slots.json"
    path.write_text(
        json.dumps([s.model_dump(mode="json", by_alias=True) for s in slots]),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def settings(tmp_path: Path, game_dir: Path, source_dir: Path, catalog_file: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "game_dir": str(game_dir),
                "source_dir": str(source_dir),
                "catalog": str(catalog_file),
            }
        )
    )
    return path


def _run(*args: str):
    return CliRunner().invoke(cli_main, list(args))


def test_help_lists_commands() -> None:
    result = _run("--help")
    assert result.exit_code == 0
    for name in ("backup", "clean", "config", "dump", "randomize", "restore", "status"):
        assert name in result.output


def test_status_before_and_after_backup(settings: Path) -> None:
    result = _run("--config", str(settings), "status")
    assert result.exit_code == 0, result.output
    assert "incomplete" in result.output

    assert _run("--config", str(settings), "backup").exit_code == 0

    result = _run("--config", str(settings), "status")
    assert result.exit_code == 0
    assert "Backups are in place" in result.output


def test_status_rejects_non_installation(settings: Path, tmp_path: Path) -> None:
    result = _run("--config", str(settings), "--game-dir", str(tmp_path / "nowhere"), "status")
    assert result.exit_code != 0
    assert "does not look like a game installation" in result.output


def test_randomize_with_seed(settings: Path, game_dir: Path) -> None:
    result = _run("--config", str(settings), "randomize", "--seed", "42")
    assert result.exit_code == 0, result.output
    assert "Randomized with seed 42" in result.output

    paths = GamePaths.for_game(game_dir)
    assert paths.data_bak.exists()
    assert paths.subtitles_bak.exists()


def test_randomize_lucky_prints_seed(settings: Path) -> None:
    result = _run("--config", str(settings), "randomize", "--lucky")
    assert result.exit_code == 0, result.output
    assert "Randomized with seed" in result.output


@pytest.mark.parametrize("args", [[], ["--seed", "1", "--lucky"]])
def test_randomize_seed_options_are_exclusive(settings: Path, args: list[str]) -> None:
    result = _run("--config", str(settings), "randomize", *args)
    assert result.exit_code == 2


def test_randomize_bad_game_dir(settings: Path, tmp_path: Path) -> None:
    result = _run(
        "--config", str(settings), "--game-dir", str(tmp_path / "nowhere"), "randomize", "--seed", "x"
    )
    assert result.exit_code == 1
    assert "randomize failed" in result.output


def test_restore_after_randomize(settings: Path, game_dir: Path) -> None:
    paths = GamePaths.for_game(game_dir)
    original_subs = paths.subtitles.read_bytes()

    assert _run("--config", str(settings), "randomize", "--seed", "7").exit_code == 0
    assert paths.subtitles.read_bytes() != original_subs

    result = _run("--config", str(settings), "restore")
    assert result.exit_code == 0, result.output
    assert paths.subtitles.read_bytes() == original_subs


def test_restore_without_backups_fails(settings: Path) -> None:
    result = _run("--config", str(settings), "restore")
    assert result.exit_code == 1
    assert "2 error(s)" in result.output


def test_dump_command(settings: Path, tmp_path: Path) -> None:
    out = tmp_path / "dumped"
    result = _run("--config", str(settings), "dump", str(out))
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out.glob("*.ogg")) == [
        "audio_log_town_1.ogg",
        "audio_log_town_2.ogg",
        "audio_log_tutorial_1.ogg",
    ]


def test_clean_command(settings: Path, game_dir: Path) -> None:
    staging = GamePaths.for_game(game_dir).staging_dir / "save_town"
    staging.mkdir(parents=True)

    result = _run("--config", str(settings), "clean", "--dry-run")
    assert result.exit_code == 0
    assert staging.exists()

    result = _run("--config", str(settings), "clean")
    assert result.exit_code == 0
    assert not staging.exists()


def test_config_show_and_write(settings: Path, tmp_path: Path, game_dir: Path) -> None:
    result = _run("--config", str(settings), "config")
    assert result.exit_code == 0
    assert yaml.safe_load(result.output)["game_dir"] == str(game_dir)

    out = tmp_path / "saved.yaml"
    result = _run("--config", str(settings), "config", "--write", str(out))
    assert result.exit_code == 0
    assert yaml.safe_load(out.read_text())["catalog"].endswith("slots.json")


def test_missing_config_file(tmp_path: Path) -> None:
    result = _run("--config", str(tmp_path / "missing.yaml"), "status")
    assert result.exit_code == 1
    assert "Configuration file not found" in result.output


def test_log_file_written(settings: Path, tmp_path: Path) -> None:
    """Runs leave a rotating log file in $LOGRANDO_LOG_DIR."""
    _run("--config", str(settings), "--verbose", "backup")
    assert (tmp_path / "logs" / "logrando.log").exists()


def test_save_logfile_mirror(settings: Path, tmp_path: Path) -> None:
    mirror = tmp_path / "mirror.txt"
    result = _run("--config", str(settings), "--verbose", "--save-logfile", str(mirror), "backup")
    assert result.exit_code == 0
    assert "Unpacking data files" in mirror.read_text()
