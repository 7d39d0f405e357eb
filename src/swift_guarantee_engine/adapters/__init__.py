"""Concrete adapters for the engine's ports."""
