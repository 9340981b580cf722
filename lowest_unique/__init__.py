"""Lowest unique number elimination game server."""

from .config import Settings
from .session import GameSession

__all__ = ["GameSession", "Settings"]
