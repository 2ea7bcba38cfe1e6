# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Uvicorn entry point for the school class API.

Example:
    $ school-class-api
    $ API_PORT=9000 API_RELOAD=true school-class-api
"""

import uvicorn

from src.core.config import get_settings


def run() -> None:
    """Serve the application with the configured API settings."""
    settings = get_settings()

    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        # Reload and multiple workers are mutually exclusive in uvicorn
        workers=1 if settings.api.reload else settings.api.workers,
        reload=settings.api.reload,
        log_config=None,
    )


if __name__ == "__main__":
    run()
