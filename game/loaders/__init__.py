"""Game file loaders for Chain Reaction."""

from .notation_loader import NotationLoader
from .transcript_loader import TranscriptLoader

__all__ = ["NotationLoader", "TranscriptLoader"]
