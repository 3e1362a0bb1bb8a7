"""Network surface for the help widget: HTTP browse/classify endpoints and websocket chat."""

from .server import create_app

__all__ = ["create_app"]
