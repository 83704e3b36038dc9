"""Global pytest configuration and fixtures."""

from __future__ import annotations


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: test needs a running Redis or PostgreSQL instance"
    )
