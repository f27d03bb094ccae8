"""Configuration models for rendering status blocks in the i3bar protocol."""

import re

from pydantic import BaseModel, Field, field_validator

from .models import Attention


HEX_COLOR_PATTERN = re.compile(r'#[0-9a-fA-F]{6}')


class AttentionColors(BaseModel):
    """Color theme keyed by block attention level.

    Default theme: Catppuccin Mocha
    """

    dim: str = Field("#6c7086", description="Low-priority blocks (gray)")
    normal: str = Field("#cdd6f4", description="Regular blocks (text)")
    warning: str = Field("#f9e2af", description="Blocks needing a look (yellow)")
    alert: str = Field("#f38ba8", description="Urgent blocks (red)")

    @field_validator('dim', 'normal', 'warning', 'alert')
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        """Validate color is a #RRGGBB hex code."""
        if not HEX_COLOR_PATTERN.fullmatch(v):
            raise ValueError(f"Invalid hex color: {v}")
        return v.lower()


class Config(BaseModel):
    """Rendering configuration for status blocks.

    Only affects how DisplayOutput is turned into i3bar JSON; blocks
    query and parse their data the same way regardless of it.
    """

    icon_font: str = Field("NerdFont", description="Pango font used for block icons")
    theme: AttentionColors = Field(default_factory=AttentionColors)

    @field_validator('icon_font')
    @classmethod
    def validate_icon_font(cls, v: str) -> str:
        """Validate font name is not empty."""
        if not v.strip():
            raise ValueError("Icon font cannot be empty")
        return v.strip()

    def color_for(self, attention: Attention) -> str:
        """Get hex color for an attention level."""
        return getattr(self.theme, attention.value)
