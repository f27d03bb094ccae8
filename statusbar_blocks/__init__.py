"""Status blocks for i3bar-protocol status bars.

This package contains a volume block that reads the mixer state via
amixer, the block interface a host status bar drives, and helpers to
render block output as i3bar protocol JSON.
"""

__version__ = "1.0.0"
