"""Serve the enrollflow API with uvicorn."""

import uvicorn

from enrollflow.api import create_app
from enrollflow.config import Settings
from enrollflow.logging import setup_logging


def main() -> None:
    """Run the HTTP server with settings from the environment."""
    setup_logging()
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
