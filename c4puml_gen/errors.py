# c4puml_gen/errors.py
from __future__ import annotations


class C4PumlError(Exception):
    """Base class for rendering and configuration failures."""


class UnsupportedElementKind(C4PumlError, TypeError):
    """An element kind has no rendering rule in the requested context."""

    def __init__(self, kind: str, context: str) -> None:
        super().__init__(f"{kind} not supported as {context}")
        self.kind = kind
        self.context = context


class InvalidConfiguration(C4PumlError, ValueError):
    """A writer configuration value is outside its recognized values."""
