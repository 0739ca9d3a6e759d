"""Application wiring: bootstrap context and persisted preferences."""
