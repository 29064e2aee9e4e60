from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from ..domain.entities import SEARCH_PROVIDERS, SearchProvider
from ..domain.state import StateContainer


def find_provider(provider_id: str) -> SearchProvider:
    for provider in SEARCH_PROVIDERS:
        if provider.id == provider_id:
            return provider
    return SEARCH_PROVIDERS[0]


@dataclass
class BuildSearchUrl:
    """Turn search-bar text into the selected provider's results URL.

    Returns ``None`` for blank input, which the search bar ignores.
    """

    container: StateContainer

    def __call__(self, query: str) -> Optional[str]:
        if not isinstance(query, str) or not query.strip():
            return None
        provider = find_provider(self.container.state.settings.search_provider)
        return provider.url + quote(query, safe="")
