"""HTTP API for adding, moving and deleting thoughts."""

from .main import create_app
from .routes import router

__all__ = ["create_app", "router"]
