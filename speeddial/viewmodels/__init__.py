"""View-model package: UI-facing projections of the dashboard state."""
