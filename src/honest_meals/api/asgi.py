"""ASGI entrypoint for the Honest Meals API."""

from honest_meals.api.app import create_app
from honest_meals.containers import build_container

app = create_app(build_container())
