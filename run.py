import argparse
import logging
import uvicorn

from app.core.config import settings
from app.db.init_db import create_all_tables

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("app")

def main():
    parser = argparse.ArgumentParser(description="Run the Bubbly engagement API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind (default: 8000)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (always on when DEBUG is set)"
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create missing tables and exit without serving"
    )

    args = parser.parse_args()

    if args.init_db:
        if not create_all_tables():
            raise SystemExit(1)
        logger.info("Tables are up to date")
        return

    use_reload = args.reload or settings.DEBUG
    logger.info(
        f"Serving {settings.PROJECT_NAME} {settings.VERSION} ({settings.ENVIRONMENT}) "
        f"on http://{args.host}:{args.port}{settings.API_V1_STR}, reload={'on' if use_reload else 'off'}"
    )

    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=use_reload)

if __name__ == "__main__":
    main()
