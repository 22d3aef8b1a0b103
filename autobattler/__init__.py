"""Deterministic combat core for a grid-based auto-battler.

- core: data types, events, timeline/turn timing and configuration
- game: board model, combat queries, unit state, managers and loaders
"""
