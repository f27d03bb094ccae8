"""Volume status block implementation using amixer."""

import subprocess
import threading
import time
import logging
from dataclasses import dataclass, replace
from typing import Optional

from .models import Attention, Block, DisplayOutput
from .errors import ParseErrorKind, StatusParseError, UpdateError

logger = logging.getLogger(__name__)

BLOCK_NAME = "volume"
DEFAULT_CONTROL = "Master"

# Retry settings (exponential backoff)
INITIAL_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 30
AMIXER_TIMEOUT_SECONDS = 2

# Largest percentage accepted from the digit string (signed 32-bit)
MAX_PERCENTAGE = 2**31 - 1

VOLUME_ICONS = (
    "\U000F057F",  # nf-md-volume_low
    "\U000F0580",  # nf-md-volume_medium
    "\U000F057E",  # nf-md-volume_high
)
MUTE_ICON = "\U000F0581"  # nf-md-volume_off
ZERO_ICON = "\U000F0E08"  # nf-md-volume_variant_off


@dataclass
class VolumeState:
    """Current audio volume state."""

    current_volume: int = 0     # Volume level (percent)
    muted: bool = False         # Mute state

    def get_icon(self) -> str:
        """Get Nerd Font icon based on state.

        Zero volume wins over mute; otherwise the level is bucketed into
        equal-width bins over VOLUME_ICONS, clamped so 100% (or more)
        maps to the last icon.
        """
        if self.current_volume == 0:
            return ZERO_ICON
        elif self.muted:
            return MUTE_ICON
        count = len(VOLUME_ICONS)
        index = min(count - 1, self.current_volume * count // 100)
        return VOLUME_ICONS[index]

    def get_text(self) -> str:
        """Get display text ("Muted" or "<level>%")."""
        if self.muted or self.current_volume == 0:
            return "Muted"
        return f"{self.current_volume}%"

    def to_output(self) -> DisplayOutput:
        """Convert to display output."""
        return DisplayOutput(
            icon=self.get_icon(),
            primary_text=self.get_text(),
            secondary_text=None,
            attention=Attention.DIM
        )


def _query_amixer(control: str) -> Optional[str]:
    """Run amixer once and return the last output line, or None on failure."""
    try:
        result = subprocess.run(
            ["amixer", "sget", control],
            capture_output=True,
            timeout=AMIXER_TIMEOUT_SECONDS
        )
    except FileNotFoundError:
        logger.warning("amixer not found - alsa-utils not installed?")
        return None
    except subprocess.TimeoutExpired:
        logger.warning("amixer command timed out")
        return None
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"amixer command failed: {e}")
        return None

    try:
        info = result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"amixer output is not valid UTF-8: {e}")
        return None

    lines = info.splitlines()
    if not lines:
        logger.warning("amixer produced no output")
        return None

    return lines[-1]


def fetch_status_line(control: str = DEFAULT_CONTROL) -> str:
    """Query the mixer until it answers and return its last output line.

    Never gives up: on failure, sleeps and doubles the wait (starting at
    INITIAL_WAIT_SECONDS, capped at MAX_WAIT_SECONDS) before trying again.
    Blocks the calling thread for as long as that takes.

    Args:
        control: Mixer control to query

    Returns:
        Last line of `amixer sget <control>` output
    """
    wait_seconds = INITIAL_WAIT_SECONDS
    while True:
        line = _query_amixer(control)
        if line is not None:
            logger.debug(f"amixer status line: {line!r}")
            return line

        logger.warning(f"Retrying amixer in {wait_seconds}s")
        time.sleep(wait_seconds)
        wait_seconds = min(wait_seconds * 2, MAX_WAIT_SECONDS)


def parse_status_line(line: str, state: Optional[VolumeState] = None) -> VolumeState:
    """Parse one amixer status line into the next volume state.

    Everything from the first '[' on is inspected: "on" means unmuted,
    "off" means muted (checked in that order). When unmuted, every digit
    in that segment is concatenated and read as the volume percentage.
    When muted the previous volume is kept.

    Args:
        line: Last line of amixer output, e.g. "Mono: Playback 50 [75%] [on]"
        state: Previous state (defaults to VolumeState())

    Returns:
        New VolumeState; `state` itself is never modified

    Raises:
        StatusParseError: If the line does not have the expected shape
    """
    if state is None:
        state = VolumeState()

    start = line.find("[")
    if start == -1:
        raise StatusParseError(
            ParseErrorKind.MALFORMED_OUTPUT,
            "couldn't parse amixer output"
        )

    segment = line[start:]

    if "on" in segment:
        muted = False
    elif "off" in segment:
        muted = True
    else:
        raise StatusParseError(
            ParseErrorKind.AMBIGUOUS_MUTE_STATE,
            "couldn't parse if volume is definitely muted or not"
        )

    if muted:
        return replace(state, muted=True)

    raw_percent = "".join(c for c in segment if "0" <= c <= "9")
    try:
        volume = int(raw_percent)
        if volume > MAX_PERCENTAGE:
            raise ValueError("number too large to fit in target type")
    except ValueError as e:
        raise StatusParseError(
            ParseErrorKind.INVALID_PERCENTAGE,
            f"couldn't parse volume from `{raw_percent}`: {e}"
        ) from e

    return replace(state, current_volume=volume, muted=False)


class VolumeBlock(Block):
    """Status block showing the mixer's output volume and mute state.

    Read-only: queries `amixer sget <control>` on every update().
    """

    def __init__(self, control: str = DEFAULT_CONTROL):
        """Initialize volume block.

        Args:
            control: Mixer control to query
        """
        self.control = control
        self.state = VolumeState()
        # Guards state commits; never held while amixer is polled
        self._state_lock = threading.Lock()

    def update(self) -> None:
        """Poll the mixer and update state.

        Blocks until amixer answers (see fetch_status_line).

        Raises:
            UpdateError: If the mixer output could not be parsed; state
                is left unchanged
        """
        line = fetch_status_line(self.control)
        with self._state_lock:
            try:
                new_state = parse_status_line(line, self.state)
            except StatusParseError as e:
                logger.error(f"Failed to parse amixer output {line!r}: {e.message}")
                raise UpdateError(BLOCK_NAME, e.message) from e

            if new_state != self.state:
                logger.debug(f"Volume state changed: {self.state} -> {new_state}")
            self.state = new_state

    def name(self) -> str:
        return BLOCK_NAME

    def output(self) -> DisplayOutput:
        with self._state_lock:
            state = self.state
        return state.to_output()
