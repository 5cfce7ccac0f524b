"""ASGI entrypoint for the book_nest API."""

from book_nest.api.app import create_app
from book_nest.containers import build_container

app = create_app(build_container())
