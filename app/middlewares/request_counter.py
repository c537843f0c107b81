import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable, Any, Optional

from app.services.counter_service import IPCounterStore

logger = logging.getLogger(__name__)


class RequestCounterMiddleware(BaseHTTPMiddleware):
    """
    Middleware to count requests per client IP
    before handing them to the route
    """

    def __init__(self, app, store: IPCounterStore, counted_paths=None):
        super().__init__(app)
        self.store = store
        self.counted_paths = counted_paths or []

    async def dispatch(self, request: Request, call_next: Callable) -> Any:
        # Only requests to counted paths are attributed
        if request.url.path not in self.counted_paths:
            return await call_next(request)

        client_ip = self._get_client_ip(request)

        if client_ip is None:
            logger.debug(f"No client address for {request.url.path}, not counting")
            return await call_next(request)

        try:
            await self.store.increment(client_ip)
        except ValueError:
            logger.debug(f"Client host {client_ip!r} is not an IP address, not counting")

        return await call_next(request)

    def _get_client_ip(self, request: Request) -> Optional[str]:
        """
        Get client IP address from the connection

        Parameters:
        - request: FastAPI request object

        Returns:
        - Peer host, or None if the server gave no connection info
        """
        # Forwarding headers are ignored; only the socket peer counts
        if request.client is None:
            return None

        return request.client.host
