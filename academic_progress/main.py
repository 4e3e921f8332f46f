# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Server entry point.

Run with ``academic-progress`` or ``uvicorn academic_progress.main:app``.
"""

import uvicorn

from academic_progress.api.app import create_app
from academic_progress.core.config import get_settings

app = create_app()


def run() -> None:
    """Start the API server."""
    settings = get_settings()
    uvicorn.run(
        "academic_progress.main:app",
        host=settings.api.host,
        port=settings.api.port,
    )


if __name__ == "__main__":
    run()
