import json
from pathlib import Path

import pytest

from logrando.catalog import load_catalog, parse_catalog
from logrando.models import Container, Loose
from logrando.utils.errors import CatalogError


def test_packaged_catalog_is_valid() -> None:
    """The shipped catalog parses, is cached and mixes loose and packaged slots."""
    slots = load_catalog()
    assert slots is load_catalog()
    assert len(slots) > 0

    kinds = {type(s.destination) for s in slots}
    assert kinds == {Loose, Container}

    locations = [(s.container, s.member_path) for s in slots]
    assert len(locations) == len(set(locations))
    assert all(s.member_path.endswith(".sound") for s in slots)


def test_parse_catalog_keeps_file_order() -> None:
    raw = json.dumps(
        [
            {"package": "pkg.zip", "filename": "b.sound", "subtitle": "k2"},
            {"package": None, "filename": "a.sound", "subtitle": "k1"},
        ]
    )
    slots = parse_catalog(raw)
    assert [s.subtitle_key for s in slots] == ["k2", "k1"]
    assert slots[0].destination == Container(path=Path("pkg.zip"))
    assert slots[1].destination == Loose()


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        '{"package": null}',
        '[{"package": null, "subtitle": "k"}]',
        '[{"package": null, "filename": "", "subtitle": "k"}]',
    ],
)
def test_parse_catalog_rejects_bad_documents(raw: str) -> None:
    with pytest.raises(CatalogError):
        parse_catalog(raw)


def test_duplicate_slot_is_fatal() -> None:
    """The same member in the same package may appear only once."""
    raw = json.dumps(
        [
            {"package": "pkg.zip", "filename": "a.sound", "subtitle": "k1"},
            {"package": "pkg.zip", "filename": "a.sound", "subtitle": "k2"},
        ]
    )
    with pytest.raises(CatalogError, match="duplicate"):
        parse_catalog(raw)


def test_same_member_in_different_packages_is_fine() -> None:
    raw = json.dumps(
        [
            {"package": "one.pkg", "filename": "a.sound", "subtitle": "k1"},
            {"package": "two.pkg", "filename": "a.sound", "subtitle": "k2"},
            {"package": None, "filename": "a.sound", "subtitle": "k3"},
        ]
    )
    assert len(parse_catalog(raw)) == 3


def test_load_catalog_from_file(tmp_path: Path) -> None:
    path = tmp_path / "custom.json"
    path.write_text(
        json.dumps([{"package": None, "filename": "x.sound", "subtitle": "x"}]),
        encoding="utf-8",
    )
    (slot,) = load_catalog(path)
    assert slot.member_path == "x.sound"
