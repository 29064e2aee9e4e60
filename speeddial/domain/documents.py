"""Native backup documents and legacy Speed Dial 2 migration.

Both parsers are pure: they turn JSON text into a ``ParsedDocument`` holding
only the collections the document actually provided. Callers decide how to
merge it into the live state, and nothing is touched when parsing fails.
"""
from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .entities import Page, Settings, Tile
from .errors import ImportDocumentError, ValidationError
from .reorder import renumber_all
from .state import parse_tiles
from .validators import UNPOSITIONED, coerce_position


@dataclass
class ParsedDocument:
    """Collections recovered from an import; ``None`` means keep the current one."""

    settings: Optional[Settings] = None
    pages: Optional[List[Page]] = None
    tiles: Optional[List[Tile]] = None


def export_document(settings: Settings, pages: List[Page], tiles: List[Tile]) -> str:
    payload = {
        "settings": settings.to_dict(),
        "tiles": [tile.to_dict() for tile in tiles],
        "pages": [page.to_dict() for page in pages],
    }
    return json.dumps(payload, ensure_ascii=False)


def _load_object(text: Any) -> Mapping[str, Any]:
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ImportDocumentError() from exc
    if not isinstance(text, str):
        raise ImportDocumentError()
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ImportDocumentError() from exc
    if not isinstance(raw, dict):
        raise ImportDocumentError("Imported file must contain a JSON object.")
    return raw


def parse_native(text: Any) -> ParsedDocument:
    """Parse a ``{"settings", "tiles", "pages"}`` backup.

    Absent (or null) top-level fields stay ``None``. An empty ``pages`` list is
    treated as absent because the page collection may never be empty.
    """
    raw = _load_object(text)
    parsed = ParsedDocument()
    try:
        if raw.get("settings") is not None:
            parsed.settings = Settings.from_dict(raw["settings"], strict=False)
        if raw.get("pages") is not None:
            if not isinstance(raw["pages"], list):
                raise ValidationError("pages must be a list.")
            pages = [Page.from_dict(item) for item in raw["pages"]]
            parsed.pages = pages or None
        if raw.get("tiles") is not None:
            parsed.tiles = parse_tiles(raw["tiles"])
    except ValidationError as err:
        raise ImportDocumentError(f"Invalid file format: {err.message}") from err
    if parsed.tiles is not None:
        renumber_all(parsed.tiles)
    return parsed


def _legacy_id(value: Any) -> Optional[str]:
    # JS truthiness: 0, "", null and missing ids get a fresh id
    if value is None or value is False or value == 0 or value == "":
        return None
    return str(value)


def _legacy_text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_legacy(text: Any) -> ParsedDocument:
    """Project a Speed Dial 2 export onto native pages and tiles.

    ``groups`` become pages and ``dials`` become tiles. Imported positions are
    untrusted: each page is renumbered by (imported position, document order)
    so the dense-permutation invariant holds afterwards.
    """
    raw = _load_object(text)
    groups = raw.get("groups") or []
    dials = raw.get("dials") or []
    if not isinstance(groups, list) or not isinstance(dials, list):
        raise ImportDocumentError("Invalid file format: groups and dials must be lists.")

    pages: List[Page] = []
    for group in groups:
        if not isinstance(group, dict):
            raise ImportDocumentError("Invalid file format: group must be an object.")
        if group.get("id") is None:
            raise ImportDocumentError("Invalid file format: group without id.")
        pages.append(Page(id=str(group.get("id")), name=_legacy_text(group.get("title"))))

    ranked: List[Tuple[Tile, Optional[int]]] = []
    for dial in dials:
        if not isinstance(dial, dict):
            raise ImportDocumentError("Invalid file format: dial must be an object.")
        if dial.get("idgroup") is None:
            raise ImportDocumentError("Invalid file format: dial without idgroup.")
        tile = Tile(
            id=_legacy_id(dial.get("id")) or uuid.uuid4().hex,
            title=_legacy_text(dial.get("title")),
            url=_legacy_text(dial.get("url")),
            image_url=_legacy_text(dial.get("thumbnail") or ""),
            page_id=str(dial.get("idgroup")),
        )
        ranked.append((tile, coerce_position(dial.get("position"))))

    # dials without a usable position sort after the positioned ones
    by_page: Dict[str, List[Tuple[int, int, Tile]]] = {}
    for order, (tile, position) in enumerate(ranked):
        key = UNPOSITIONED if position is None else position
        by_page.setdefault(tile.page_id, []).append((key, order, tile))
    for entries in by_page.values():
        entries.sort(key=lambda entry: (entry[0], entry[1]))
        for index, (_, _, tile) in enumerate(entries):
            tile.position = index

    return ParsedDocument(
        pages=pages or None,
        tiles=[tile for tile, _ in ranked] or None,
    )


__all__ = ["ParsedDocument", "export_document", "parse_legacy", "parse_native"]
