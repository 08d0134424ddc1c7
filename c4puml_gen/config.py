# c4puml_gen/config.py
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Literal, Mapping, Optional

from .errors import InvalidConfiguration

LayoutDirection = Literal["none", "top-down", "left-right"]
LAYOUT_DIRECTIONS: tuple[str, ...] = ("none", "top-down", "left-right")


@dataclass(frozen=True)
class WriterConfig:
    """Rendering options shared by every view.

    custom_base_url: when empty, the PlantUML stdlib C4 library is included
    and deployment views carry inline fallback definitions. Otherwise
    `!includeurl <base>C4_<Kind>.puml` is used for every kind.
    """

    include_legend_layout: bool = True
    sketch_mode: bool = False
    layout_direction: LayoutDirection = "none"
    custom_base_url: str = ""

    def __post_init__(self) -> None:
        for name in ("include_legend_layout", "sketch_mode"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfiguration(
                    f"{name} must be a bool, got {getattr(self, name)!r}"
                )
        if self.layout_direction not in LAYOUT_DIRECTIONS:
            raise InvalidConfiguration(
                f"unknown layout_direction {self.layout_direction!r} "
                f"(expected one of {', '.join(LAYOUT_DIRECTIONS)})"
            )
        if not isinstance(self.custom_base_url, str):
            raise InvalidConfiguration(
                f"custom_base_url must be a string, got {self.custom_base_url!r}"
            )

    @property
    def has_custom_base(self) -> bool:
        return bool(self.custom_base_url.strip())

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> WriterConfig:
        """Build a config from a `writer:` mapping; unknown keys are rejected."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidConfiguration(
                f"writer config must be a mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfiguration(f"unknown writer option(s): {', '.join(unknown)}")

        values = dict(data)
        if values.get("custom_base_url") is None:
            values.pop("custom_base_url", None)
        if values.get("layout_direction") is None:
            values.pop("layout_direction", None)
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> WriterConfig:
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self
