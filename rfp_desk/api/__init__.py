"""API modules."""

from rfp_desk.api.app import create_app
from rfp_desk.api.routes import router

__all__ = ["create_app", "router"]
