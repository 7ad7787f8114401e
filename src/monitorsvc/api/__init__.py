"""REST transport: FastAPI application, security and routes."""

from monitorsvc.api.app import create_app

__all__ = ["create_app"]
