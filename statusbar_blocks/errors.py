"""Error types for status blocks.

Two tiers:
- StatusParseError: raised by block parsers when command output has an
  unrecognised shape. Carries a ParseErrorKind so callers can tell the
  failure modes apart.
- UpdateError: what a block's update() raises to the host status bar.
  Carries the block name so the host can attribute the failure.
"""

from enum import Enum
from typing import Dict


class ParseErrorKind(Enum):
    """Failure modes of the mixer output parser."""

    MALFORMED_OUTPUT = "malformed_output"            # No '[' segment at all
    AMBIGUOUS_MUTE_STATE = "ambiguous_mute_state"    # Neither "on" nor "off"
    INVALID_PERCENTAGE = "invalid_percentage"        # Digits missing or out of range


class StatusParseError(Exception):
    """Raised when a raw status line cannot be parsed."""

    def __init__(self, kind: ParseErrorKind, message: str):
        """
        Initialize parse error.

        Args:
            kind: Failure mode from ParseErrorKind
            message: Human-readable error message
        """
        self.kind = kind
        self.message = message
        super().__init__(message)


class UpdateError(Exception):
    """Raised by Block.update() when a block cannot refresh its state."""

    def __init__(self, block_name: str, message: str):
        """
        Initialize update error.

        Args:
            block_name: Name of the block that failed (e.g. "volume")
            message: Human-readable error message
        """
        self.block_name = block_name
        self.message = message
        super().__init__(f"{block_name}: {message}")

    def to_dict(self) -> Dict[str, str]:
        """Convert error to dictionary for hosts that serialise errors."""
        return {
            "block_name": self.block_name,
            "message": self.message
        }
