"""FastAPI dependencies shared by the widget routers."""

from fastapi import Request

from marketplace.api.registry import SessionRegistry


def get_registry(request: Request) -> SessionRegistry:
    """Return the process-wide ``SessionRegistry`` from the app's services."""
    return request.app.state.services["registry"]
