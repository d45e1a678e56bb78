"""ASGI entrypoint for the pantry API."""

from pantry_pal.api.app import create_app
from pantry_pal.containers import build_container

app = create_app(build_container())
