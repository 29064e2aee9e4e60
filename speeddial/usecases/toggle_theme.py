from __future__ import annotations

from dataclasses import dataclass, replace

from ..domain.defaults import DARK_BACKGROUND, LIGHT_BACKGROUND
from ..domain.entities import Settings
from ..domain.state import StateContainer


@dataclass
class ToggleTheme:
    """Switch dark/light and reset the background colour to the theme's default."""

    container: StateContainer

    def __call__(self) -> Settings:
        state = self.container.state
        theme = "light" if state.settings.theme == "dark" else "dark"
        background = DARK_BACKGROUND if theme == "dark" else LIGHT_BACKGROUND
        state.settings = replace(state.settings, theme=theme, background_color=background)
        self.container.persist()
        return state.settings
