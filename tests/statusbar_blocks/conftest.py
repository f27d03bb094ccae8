"""Pytest configuration and fixtures for status block tests."""

from unittest.mock import Mock

import pytest


@pytest.fixture
def amixer_output_unmuted():
    """amixer sget Master output for unmuted volume at 75%."""
    return (
        "Simple mixer control 'Master',0\n"
        "  Capabilities: pvolume pvolume-joined pswitch pswitch-joined\n"
        "  Playback channels: Mono\n"
        "  Limits: Playback 0 - 87\n"
        "  Mono: Playback 50 [75%] [on]\n"
    )


@pytest.fixture
def amixer_output_muted():
    """amixer sget Master output for muted volume."""
    return (
        "Simple mixer control 'Master',0\n"
        "  Capabilities: pvolume pvolume-joined pswitch pswitch-joined\n"
        "  Playback channels: Mono\n"
        "  Limits: Playback 0 - 87\n"
        "  Mono: Playback 0 [0%] [off]\n"
    )


@pytest.fixture
def make_completed_process():
    """Build a fake subprocess.run result from text or raw bytes."""
    def _make(stdout, returncode=0):
        if isinstance(stdout, str):
            stdout = stdout.encode("utf-8")
        return Mock(stdout=stdout, stderr=b"", returncode=returncode)
    return _make


@pytest.fixture
def sample_config():
    """Sample configuration for testing."""
    from statusbar_blocks.config import Config
    return Config()
