"""Application composition: configuration, wiring, timers and the CLI."""
