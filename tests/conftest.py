# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from typing import Any

import pytest


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires services)"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_class_data() -> dict[str, Any]:
    """Provide a valid class creation payload."""
    return {
        "class_name": "Grade 10A",
        "floor_number": 2,
        "level_grade": "10",
    }
