"""Transcript providers."""

from .base import TranscriptProvider
from .standalone import StandaloneProvider
from .backend import BackendProvider

__all__ = ["TranscriptProvider", "StandaloneProvider", "BackendProvider"]
