from pathlib import Path

from logrando.config.schema import LayoutSection
from logrando.utils.paths import GamePaths


def test_default_layout(tmp_path: Path) -> None:
    p = GamePaths.for_game(tmp_path)
    assert p.data_zip == tmp_path / "data-pc.zip"
    assert p.data_bak == tmp_path / "data-pc.zip.bak"
    assert p.data_dir == tmp_path / "data-pc"
    assert p.subtitles == tmp_path / "data" / "strings" / "en.subtitles"
    assert p.subtitles_bak == tmp_path / "data" / "strings" / "en.subtitles.bak"
    assert p.staging_dir == tmp_path / "tmp"


def test_asset_and_package_paths(tmp_path: Path) -> None:
    p = GamePaths.for_game(tmp_path)
    assert p.asset("sub\\a.sound") == tmp_path / "data-pc" / "sub" / "a.sound"
    assert p.package(Path("save_town.pkg")) == tmp_path / "data-pc" / "save_town.pkg"
    assert p.package_staging(Path("save_town.pkg")) == tmp_path / "tmp" / "save_town"


def test_custom_layout(tmp_path: Path) -> None:
    layout = LayoutSection(data_archive="pack.zip", backup_suffix=".orig")
    p = GamePaths.for_game(tmp_path, layout)
    assert p.data_bak == tmp_path / "pack.zip.orig"
