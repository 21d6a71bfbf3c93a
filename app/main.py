from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.config import settings
from app.core.errors import AppError, UnexpectedError
from app.db import base  # noqa: F401  registers every model on Base.metadata
from app.middleware.request_logging import RequestLoggingMiddleware
from app.middleware.auth_logging import AuthLoggingMiddleware
from app.modules.cache.api.router import router as cache_router
from app.modules.comments.api.router import router as comments_router, share_comments_router
from app.modules.likes.api.router import router as likes_router
from app.modules.notifications.api.router import router as notifications_router
from app.modules.posts.api.router import router as posts_router
from app.modules.reactions.api.router import router as reactions_router, share_router as share_reactions_router
from app.modules.shares.api.router import router as shares_router
from app.db.init_db import create_all_tables

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("app")

# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    debug=settings.DEBUG,
    description="Reactions, likes, shares and comments for the Bubbly social network",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"defaultModelsExpandDepth": -1},
)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    create_all_tables()

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid input") if errors else "Invalid input"
    return JSONResponse(status_code=400, content={"success": False, "error": message})

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(status_code=500, content={"success": False, "error": UnexpectedError.default_message})

# Add middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(AuthLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(posts_router, prefix=f"{settings.API_V1_STR}/posts", tags=["posts"])
app.include_router(likes_router, prefix=f"{settings.API_V1_STR}/likes", tags=["likes"])
app.include_router(reactions_router, prefix=f"{settings.API_V1_STR}/reactions", tags=["reactions"])
app.include_router(share_reactions_router, prefix=f"{settings.API_V1_STR}/shares", tags=["reactions"])
app.include_router(shares_router, prefix=f"{settings.API_V1_STR}/shares", tags=["shares"])
app.include_router(comments_router, prefix=f"{settings.API_V1_STR}/comments", tags=["comments"])
app.include_router(share_comments_router, prefix=f"{settings.API_V1_STR}/share-comments", tags=["comments"])
app.include_router(notifications_router, prefix=f"{settings.API_V1_STR}/notifications", tags=["notifications"])
app.include_router(cache_router, prefix=f"{settings.API_V1_STR}/cache", tags=["cache"])

@app.get("/")
async def root():
    return {
        "message": "Welcome to Bubbly",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "documentation": "/docs" if settings.DEBUG else None,
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
