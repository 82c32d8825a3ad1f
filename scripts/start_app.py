#!/usr/bin/env python3
"""Start the comments API.

Logfire is configured before the app is built so that failures while
building it (bad settings, unreachable webhook config) are reported.
"""

import sys

import logfire
import uvicorn

from canopy.config import Settings
from canopy.util.logging import setup_logging
from canopy.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting comments API", port=settings.port, environment=settings.environment
    )
    try:
        uvicorn.run(
            "canopy.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            log_config=None,  # keep the handlers installed by setup_logging
        )
    except Exception:
        logfire.exception("Comments API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
