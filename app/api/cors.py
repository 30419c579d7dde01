"""
CORS handling for the Event Manager Service.

Allowed origins are part of the configuration loaded at startup, so the
Starlette CORS middleware is created per origin list found on the service
container instead of once at import time.
"""

from typing import Dict, Tuple
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class ContainerCORSMiddleware:
    """Apply ``CORSMiddleware`` with the origins of ``app.state.container``."""

    def __init__(self, app: ASGIApp, **options):
        self.app = app
        self.options = options
        self._middlewares: Dict[Tuple[str, ...], CORSMiddleware] = {}

    def _origins(self, scope: Scope) -> Tuple[str, ...]:
        application = scope.get("app")
        container = getattr(application.state, "container", None) if application is not None else None
        return tuple(container.cors_origins) if container is not None else ()

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origins = self._origins(scope)
        middleware = self._middlewares.get(origins)
        if middleware is None:
            middleware = CORSMiddleware(self.app, allow_origins=list(origins), **self.options)
            self._middlewares[origins] = middleware

        await middleware(scope, receive, send)
