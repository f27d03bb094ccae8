"""Core data models for status blocks and the i3bar protocol."""

import html
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config


class Attention(Enum):
    """How strongly a block asks for the user's attention."""
    DIM = "dim"
    NORMAL = "normal"
    WARNING = "warning"
    ALERT = "alert"


@dataclass
class StatusBlock:
    """A single status block in the i3bar protocol format.

    See: https://i3wm.org/docs/i3bar-protocol.html
    """

    # Required fields
    full_text: str          # Full text to display (with markup)
    name: str               # Block identifier (volume, ...)

    # Optional fields
    short_text: Optional[str] = None      # Abbreviated text for small displays
    color: Optional[str] = None           # Hex color code (#RRGGBB)
    background: Optional[str] = None      # Background color
    border: Optional[str] = None          # Border color
    border_top: int = 0                   # Border width (pixels)
    border_right: int = 0
    border_bottom: int = 0
    border_left: int = 0
    min_width: Optional[int] = None       # Minimum width (pixels)
    align: str = "left"                   # Text alignment (left, center, right)
    urgent: bool = False                  # Urgent flag (highlights block)
    separator: bool = True                # Show separator after block
    separator_block_width: int = 15       # Separator width
    markup: str = "pango"                 # Markup type (none, pango)
    instance: Optional[str] = None        # Block instance identifier

    def to_json(self) -> dict:
        """Convert to i3bar protocol JSON format.

        Omits None values and zero integers (False included) to minimize
        JSON output. Border widths are always kept; swaybar draws a
        default border when they are missing.
        """
        borders = ("border_top", "border_right", "border_bottom", "border_left")
        return {
            k: v for k, v in asdict(self).items()
            if v is not None and (not isinstance(v, int) or v != 0 or k in borders)
        }


@dataclass
class DisplayOutput:
    """What a block wants shown: one icon glyph plus text."""

    icon: str                               # Single Nerd Font glyph
    primary_text: str                       # Main text (e.g. "75%")
    secondary_text: Optional[str] = None    # Extra detail, usually absent
    attention: Attention = Attention.NORMAL

    def to_status_block(self, name: str, config: 'Config') -> StatusBlock:
        """Convert to an i3bar status block.

        Args:
            name: Block identifier for the i3bar "name" field
            config: Rendering configuration (icon font, colors)

        Returns:
            StatusBlock with pango markup; all text is markup-escaped
        """
        font = html.escape(config.icon_font, quote=True)
        icon = html.escape(self.icon)
        text = html.escape(self.primary_text)
        if self.secondary_text:
            text = f"{text} {html.escape(self.secondary_text)}"

        return StatusBlock(
            name=name,
            full_text=f"<span font='{font}'>{icon}</span> {text}",
            short_text=html.escape(self.primary_text),
            color=config.color_for(self.attention),
            markup="pango",
            urgent=self.attention is Attention.ALERT
        )


class Block(ABC):
    """Interface every status block implements for the host status bar.

    The host decides when to call update(); output() may be requested
    any time after that and must reflect the latest successful update.
    output() may be called from another thread while update() runs, so
    blocks hold locks only while committing new state, never across
    blocking I/O.
    """

    @abstractmethod
    def update(self) -> None:
        """Refresh block state.

        Raises:
            UpdateError: If the block could not refresh its state
        """

    @abstractmethod
    def name(self) -> str:
        """Block identifier (e.g. "volume")."""

    @abstractmethod
    def output(self) -> Optional[DisplayOutput]:
        """Current display output, or None if the block shows nothing."""

    def next_update_time(self) -> Optional[datetime]:
        """When the block wants its next update, or None to let the host decide."""
        return None
