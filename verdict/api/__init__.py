"""FastAPI host for the chat UI.

Endpoints:
    - GET /health: Service health status
    - GET /: Chat page (NiceGUI, mounted by the entry point)
"""

from verdict.api.app import create_app

__all__ = ["create_app"]
