import os
import zipfile
from pathlib import Path

import pytest

from logrando.utils.archive import extract_one, looks_like_archive, pack, unpack


def _tree(root: Path) -> None:
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.sound").write_bytes(b"alpha")
    (root / "sub" / "b.sound").write_bytes(b"bravo" * 100)
    (root / "sub" / "deeper" / "c.txt").write_text("charlie")


def _files(root: Path) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in root.rglob("*")
        if p.is_file()
    }


def test_pack_unpack_round_trip(tmp_path: Path) -> None:
    """Packing then unpacking reproduces paths and contents, empty dirs included."""
    src = tmp_path / "src"
    src.mkdir()
    _tree(src)

    archive = pack(src, tmp_path / "out.pkg")
    dest = unpack(archive, tmp_path / "dest")

    assert _files(dest) == _files(src)
    assert (dest / "empty").is_dir()


def test_pack_is_sorted_stored_and_deterministic(tmp_path: Path) -> None:
    """Same tree → byte-identical archive, regardless of file mtimes."""
    src = tmp_path / "src"
    src.mkdir()
    _tree(src)

    first = pack(src, tmp_path / "one.zip").read_bytes()
    os.utime(src / "a.sound", (1_000_000_000, 1_000_000_000))
    second = pack(src, tmp_path / "two.zip").read_bytes()
    assert first == second

    with zipfile.ZipFile(tmp_path / "one.zip") as zf:
        names = zf.namelist()
        assert names == sorted(names)
        assert "empty/" in names
        assert all(i.compress_type == zipfile.ZIP_STORED for i in zf.infolist())


def test_unpack_skips_escaping_entries(tmp_path: Path) -> None:
    """Entries that would land outside the destination are ignored."""
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../evil.txt", b"nope")
        zf.writestr("/abs.txt", b"nope")
        zf.writestr("ok/../fine.txt", b"yes")
        zf.writestr("good.txt", b"yes")

    dest = unpack(archive, tmp_path / "out")

    assert not (tmp_path / "evil.txt").exists()
    assert sorted(_files(dest)) == ["fine.txt", "good.txt"]


def test_unpack_rejects_non_zip(tmp_path: Path) -> None:
    """A corrupt archive raises zipfile.BadZipFile."""
    bogus = tmp_path / "bogus.pkg"
    bogus.write_bytes(b"not a zip")
    with pytest.raises(zipfile.BadZipFile):
        unpack(bogus, tmp_path / "out")


def test_extract_one_found(tmp_path: Path) -> None:
    """A verbatim member name is extracted below the destination."""
    archive = tmp_path / "pkg.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("logs/a.sound", b"A")
        zf.writestr("b.sound", b"B")

    out = extract_one(archive, "logs/a.sound", tmp_path / "x")
    assert out == tmp_path / "x" / "logs" / "a.sound"
    assert out.read_bytes() == b"A"


def test_extract_one_missing_member_is_noop(tmp_path: Path) -> None:
    """No matching member: returns None and creates no output file."""
    archive = tmp_path / "pkg.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("b.sound", b"B")
    dest = tmp_path / "x"
    dest.mkdir()

    assert extract_one(archive, "B.sound", dest) is None
    assert extract_one(archive, "./b.sound", dest) is None
    assert list(dest.iterdir()) == []


def test_extract_one_io_failure_raises(tmp_path: Path) -> None:
    """A missing archive is an I/O failure, not a no-op."""
    with pytest.raises(FileNotFoundError):
        extract_one(tmp_path / "missing.zip", "a.sound", tmp_path)


def test_looks_like_archive(tmp_path: Path) -> None:
    pkg = tmp_path / "save_town.PKG"
    pkg.write_bytes(b"")
    other = tmp_path / "notes.txt"
    other.write_bytes(b"")

    assert looks_like_archive(pkg)
    assert not looks_like_archive(other)
    assert not looks_like_archive(tmp_path / "missing.zip")
