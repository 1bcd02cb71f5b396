"""ASGI entrypoint for the travel stories API."""

from travel_stories.api.app import create_app
from travel_stories.containers import build_container

app = create_app(build_container())
