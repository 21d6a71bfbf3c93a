from fastapi import Request
import logging
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

logger = logging.getLogger("app")

# Endpoints readable without a token
PUBLIC_PATHS = ("/", "/docs", "/redoc", f"{settings.API_V1_STR}/openapi.json", f"{settings.API_V1_STR}/cache/invalidation-rules")

class AuthLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Ledger endpoints all require a bearer token
        if not request.headers.get("Authorization") and path.startswith(settings.API_V1_STR) and path not in PUBLIC_PATHS:
            logger.warning(f"Protected endpoint {path} accessed without auth header")

        response = await call_next(request)

        # Log auth-related status codes
        if response.status_code in [401, 403]:
            logger.warning(f"Auth error: {response.status_code} on {request.method} {path}")

        return response
