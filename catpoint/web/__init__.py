"""Web control API for the catpoint security system."""

from .app import SecurityWebApp, StatusBoard, create_app

__all__ = ['SecurityWebApp', 'StatusBoard', 'create_app']
