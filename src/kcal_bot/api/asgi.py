"""ASGI entrypoint for the meal bot API."""

from kcal_bot.api.app import create_app
from kcal_bot.containers import build_container

app = create_app(build_container())
