from __future__ import annotations

import json

import pytest

from speeddial.domain.defaults import default_pages, default_settings, default_tiles
from speeddial.domain.documents import export_document, parse_legacy, parse_native
from speeddial.domain.entities import Page
from speeddial.domain.errors import ImportDocumentError


def test_native_document_round_trip() -> None:
    settings = default_settings().merged({"cols": 7, "theme": "light"})
    pages = default_pages()
    tiles = default_tiles()

    parsed = parse_native(export_document(settings, pages, tiles))

    assert parsed.settings == settings
    assert parsed.pages == pages
    assert [t.to_dict() for t in parsed.tiles] == [t.to_dict() for t in tiles]


def test_export_document_shape() -> None:
    document = json.loads(export_document(default_settings(), default_pages(), default_tiles()))

    assert set(document) == {"settings", "tiles", "pages"}
    assert document["tiles"][0]["imageUrl"] == ""


@pytest.mark.parametrize("text", ["not json", "[]", '"text"', b"\xff\xfe", 42])
def test_native_rejects_non_objects(text) -> None:
    with pytest.raises(ImportDocumentError) as exc:
        parse_native(text)
    assert exc.value.code == "IMPORT_FAILED"


def test_native_missing_or_null_fields_stay_absent() -> None:
    parsed = parse_native(json.dumps({"settings": {"cols": 2}, "tiles": None}))

    assert parsed.settings.cols == 2
    assert parsed.pages is None
    assert parsed.tiles is None


def test_native_empty_pages_are_ignored() -> None:
    assert parse_native(json.dumps({"pages": []})).pages is None


def test_native_bad_record_is_rejected() -> None:
    bad = {"tiles": [{"id": "t1", "title": "A", "position": 0}]}

    with pytest.raises(ImportDocumentError):
        parse_native(json.dumps(bad))


def test_native_loose_positions_are_renumbered() -> None:
    tiles = [
        {"id": "a", "pageId": "p1", "position": None},
        {"id": "b", "pageId": "p1", "position": "1"},
        {"id": "c", "pageId": "p1", "position": "first"},
        {"id": "d", "pageId": "p1", "position": "0"},
    ]

    parsed = parse_native(json.dumps({"tiles": tiles}))

    assert [t.id for t in parsed.tiles] == ["a", "b", "c", "d"]
    assert {t.id: t.position for t in parsed.tiles} == {"d": 0, "b": 1, "a": 2, "c": 3}


def test_native_import_renumbers_tiles() -> None:
    tiles = [
        {"id": "a", "title": "A", "url": "https://a", "pageId": "p1", "position": 4},
        {"id": "b", "title": "B", "url": "https://b", "pageId": "p1", "position": 4},
    ]

    parsed = parse_native(json.dumps({"tiles": tiles}))

    assert [t.position for t in parsed.tiles] == [0, 1]


def test_legacy_groups_and_dials_are_projected() -> None:
    legacy = {
        "groups": [{"id": 1, "title": "Home"}],
        "dials": [{"id": 5, "idgroup": 1, "title": "X", "url": "https://x.com", "position": 0}],
    }

    parsed = parse_legacy(json.dumps(legacy))

    assert parsed.settings is None
    assert parsed.pages == [Page(id="1", name="Home")]
    tile = parsed.tiles[0]
    assert (tile.id, tile.page_id, tile.url, tile.title, tile.position) == ("5", "1", "https://x.com", "X", 0)
    assert tile.image_url == ""


def test_legacy_positions_are_renumbered_per_group() -> None:
    legacy = {
        "groups": [{"id": 1, "title": "A"}, {"id": 2, "title": "B"}],
        "dials": [
            {"id": 10, "idgroup": 1, "url": "https://a", "position": 9},
            {"id": 11, "idgroup": 1, "url": "https://b"},
            {"id": 12, "idgroup": 1, "url": "https://c", "position": 3},
            {"id": 13, "idgroup": 2, "url": "https://d", "position": 40, "thumbnail": "https://d/t.png"},
        ],
    }

    parsed = parse_legacy(json.dumps(legacy))

    positions = {t.id: t.position for t in parsed.tiles}
    assert positions == {"12": 0, "10": 1, "11": 2, "13": 0}
    assert parsed.tiles[3].image_url == "https://d/t.png"


def test_legacy_falsy_dial_id_gets_generated() -> None:
    legacy = {"groups": [{"id": 1, "title": "A"}], "dials": [{"id": 0, "idgroup": 1, "url": "https://a"}]}

    tile = parse_legacy(json.dumps(legacy)).tiles[0]

    assert tile.id != "0"
    assert len(tile.id) == 32


def test_legacy_empty_collections_are_absent() -> None:
    parsed = parse_legacy(json.dumps({"groups": [], "dials": []}))

    assert parsed.pages is None
    assert parsed.tiles is None


def test_legacy_dial_without_group_is_rejected() -> None:
    legacy = {"groups": [{"id": 1, "title": "A"}], "dials": [{"id": 3, "url": "https://a"}]}

    with pytest.raises(ImportDocumentError):
        parse_legacy(json.dumps(legacy))
