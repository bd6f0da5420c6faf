"""ASGI entrypoint for the birthday board API."""

from birthday_board.api.app import create_app
from birthday_board.containers import build_container

app = create_app(build_container())
