"""
Shared fixtures for securerand tests.
"""

from unittest.mock import MagicMock

import pytest

from securerand.core.errors import SourceUnavailableError
from securerand.core.source import SecureRandomSource


@pytest.fixture
def spy_source():
    """A real CSPRNG source whose read() calls are recorded."""
    real = SecureRandomSource()
    source = MagicMock(spec=SecureRandomSource)
    source.read.side_effect = real.read
    return source


@pytest.fixture
def failing_source():
    """A source that always fails the way the platform would."""
    cause = OSError("getrandom unavailable")
    error = SourceUnavailableError(f"random bytes failed: {cause}")
    error.__cause__ = cause
    source = MagicMock(spec=SecureRandomSource)
    source.read.side_effect = error
    return source
