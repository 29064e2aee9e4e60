from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import Tile
from ..domain.naming import make_entity_id
from ..domain.state import StateContainer
from ..domain.validators import coerce_text, derive_title, normalize_url

log = logging.getLogger(__name__)


@dataclass
class CreateTile:
    container: StateContainer

    def __call__(
        self,
        page_id: str,
        url: str,
        title: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> Tile:
        state = self.container.state
        state.require_page(page_id)
        normalized = normalize_url(url)
        tile = Tile(
            id=make_entity_id("t", {t.id for t in state.tiles}),
            title=derive_title(normalized, title),
            url=normalized,
            image_url=coerce_text("imageUrl", image_url),
            page_id=page_id,
            position=state.count_tiles_on(page_id),
        )
        state.tiles.append(tile)
        log.info("Created tile %s on page %s at position %d", tile.id, page_id, tile.position)
        self.container.persist()
        return tile
