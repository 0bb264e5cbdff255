"""ASGI entrypoint for the diet tracker API."""

from diet_tracker.api.app import create_app
from diet_tracker.containers import build_container

app = create_app(build_container())
