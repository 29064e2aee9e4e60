from __future__ import annotations

from dataclasses import dataclass

from ..domain.state import DashboardState, StateContainer


@dataclass
class ResetDashboard:
    """Erase everything stored (quick note included) and restore defaults."""

    container: StateContainer

    def __call__(self) -> DashboardState:
        return self.container.reset()
