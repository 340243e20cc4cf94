"""Route group exports."""

from . import campus, energy, health, siting

__all__ = ["campus", "energy", "health", "siting"]
