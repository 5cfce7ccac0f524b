"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from book_nest.api.app import create_app
from book_nest.config import Settings
from book_nest.containers import build_container


def main() -> None:
    """Build the app from environment settings and serve it."""
    settings = Settings()
    app = create_app(build_container(settings))
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
