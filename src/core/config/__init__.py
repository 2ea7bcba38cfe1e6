# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package.

Settings are Pydantic-based and loaded from environment variables.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.db.url)
"""

from src.core.config.settings import (
    APISettings,
    CORSSettings,
    DatabaseSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "APISettings",
    "CORSSettings",
    "DatabaseSettings",
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
