"""Web front end for the introspection endpoints."""

from .handler import create_app, create_blueprint

__all__ = ["create_app", "create_blueprint"]
