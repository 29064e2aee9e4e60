from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping

from ..domain.entities import Tile
from ..domain.errors import ValidationError
from ..domain.reorder import renumber, tiles_on_page
from ..domain.state import StateContainer
from ..domain.validators import coerce_text, derive_title, normalize_url

log = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "url", "imageUrl", "pageId")


@dataclass
class UpdateTile:
    """Merge edited fields into a tile.

    ``fields`` uses the record keys (``title``, ``url``, ``imageUrl``,
    ``pageId``). A changed URL is re-normalized; a blank title falls back to the
    URL host. Moving a tile to another page appends it to that page and closes
    the gap it leaves behind.
    """

    container: StateContainer

    def __call__(self, tile_id: str, fields: Mapping[str, Any]) -> Tile:
        state = self.container.state
        tile = state.require_tile(tile_id)
        unknown = sorted(str(key) for key in fields if key not in EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unsupported tile fields: {', '.join(unknown)}")

        changes: Dict[str, Any] = {}
        if "url" in fields:
            changes["url"] = normalize_url(fields["url"])
        url = changes.get("url", tile.url)
        if "title" in fields:
            changes["title"] = derive_title(url, coerce_text("title", fields["title"]))
        if "imageUrl" in fields:
            changes["image_url"] = coerce_text("imageUrl", fields["imageUrl"])
        target_page = tile.page_id
        if "pageId" in fields:
            target_page = str(fields["pageId"])
            state.require_page(target_page)

        # validated; mutate from here on
        source_page = tile.page_id
        if target_page != source_page:
            changes["page_id"] = target_page
            changes["position"] = state.count_tiles_on(target_page)
        updated = replace(tile, **changes)
        index = state.tiles.index(tile)
        state.tiles[index] = updated
        if target_page != source_page:
            renumber(tiles_on_page(state.tiles, source_page))
            log.info("Moved tile %s from page %s to %s", tile_id, source_page, target_page)
        self.container.persist()
        return updated
