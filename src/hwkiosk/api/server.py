"""
ASGI Entry Point for the hwkiosk API.

This module exposes the `app` object required by ASGI servers (Uvicorn).
It loads environment variables from `.env` before the settings singleton and
the application factory run, so `HWKIOSK_*` overrides in that file apply.

Usage
-----
Run via the console script:
    $ hwkiosk-api

Or via uvicorn directly:
    $ uvicorn hwkiosk.api.server:app --host 127.0.0.1 --port 8765
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(".env"))

from hwkiosk.api.app import create_app  # noqa: E402
from hwkiosk.core.settings import load_settings  # noqa: E402

app = create_app()


def main(host: str | None = None, port: int | None = None) -> None:
    """Serve the API with uvicorn on the configured address."""
    cfg = load_settings()
    uvicorn.run(
        app,
        host=host or cfg.host,
        port=port or cfg.port,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
