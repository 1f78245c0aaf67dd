"""
Pytest configuration for crossshell tests.
"""

import io
import os
import sys
from pathlib import Path

import pytest

# Add app directory to path
APP_DIR = Path(__file__).parent.parent / "app"
sys.path.insert(0, str(APP_DIR))

from crossshell.executor import PlatformResolver  # noqa: E402

HAS_BASH = sys.platform != "win32" and os.path.exists("/bin/bash")


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test"
    )
    config.addinivalue_line(
        "markers", "requires_bash: test launches real /bin/bash processes"
    )


def pytest_collection_modifyitems(config, items):
    """Skip real-process tests on hosts without /bin/bash."""
    if HAS_BASH:
        return
    skip_bash = pytest.mark.skip(reason="/bin/bash not available")
    for item in items:
        if "requires_bash" in item.keywords:
            item.add_marker(skip_bash)


@pytest.fixture
def console() -> io.StringIO:
    """In-memory console for streamed output."""
    return io.StringIO()


@pytest.fixture
def fake_platform():
    """Build a resolver that reports a fixed OS identity."""

    def _make(system_name: str) -> PlatformResolver:
        return PlatformResolver(system=lambda: system_name)

    return _make
