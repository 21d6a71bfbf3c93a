from fastapi import Request
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app")

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        method = request.method
        path = request.url.path

        logger.info(f"Request: {method} {path} {request.url.query}")

        response = await call_next(request)

        # Mutations are the writes clients must follow with cache invalidation
        process_time = time.time() - start_time
        if method in ("POST", "PUT", "DELETE") and response.status_code < 400:
            logger.info(f"Mutation: {method} {path} -> {response.status_code} in {process_time:.4f}s")
        else:
            logger.info(f"Response: {response.status_code} in {process_time:.4f}s")
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        return response
