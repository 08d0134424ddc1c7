"""Render architecture workspaces as C4-PlantUML diagram source."""
from __future__ import annotations

from .config import WriterConfig
from .diagrams.registry import render_view, stream_view
from .errors import C4PumlError, InvalidConfiguration, UnsupportedElementKind

__all__ = [
    "C4PumlError",
    "InvalidConfiguration",
    "UnsupportedElementKind",
    "WriterConfig",
    "render_view",
    "stream_view",
]
