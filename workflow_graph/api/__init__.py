"""FastAPI application and routes."""

from workflow_graph.api.app import create_app
from workflow_graph.api.routes import router

__all__ = ["create_app", "router"]
