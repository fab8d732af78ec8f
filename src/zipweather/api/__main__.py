"""
zipweather.api.__main__

Entrypoint for running either service via `python -m zipweather.api`.

Responsibilities:
- Load settings (`ZIPWEATHER_ROLE` selects entry or resolution).
- Create the app; a tracing init failure aborts here before serving traffic.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from zipweather.api.app import create_app
from zipweather.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
