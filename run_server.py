"""
FastAPI Application Startup Script

Configures file logging and starts the user service under uvicorn.
"""

import logging
import sys

from config import get_settings, setup_universal_logging


def setup_logging():
    """Setup logging configuration."""
    settings = get_settings()
    setup_universal_logging(
        log_file=settings.LOG_FILE,
        log_level=settings.LOG_LEVEL,
        rotation_type=settings.LOG_ROTATION_TYPE,
        rotation_when=settings.LOG_ROTATION_WHEN,
        rotation_interval=settings.LOG_ROTATION_INTERVAL,
        max_bytes=settings.LOG_MAX_SIZE,
        backup_count=settings.LOG_BACKUP_COUNT,
    )


def main():
    """Main entry point for the FastAPI application."""
    try:
        settings = get_settings()
    except Exception as exc:
        # Missing JWT_SECRET and other invalid settings end up here
        print(f"[ERROR] Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info(f"[START] Starting {settings.APP_NAME}")
    logger.info(f"[ENV] Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"[HOST] Host: {settings.HOST}:{settings.PORT}")

    import uvicorn

    if settings.DEBUG:
        logger.info("[DEV] Running in development mode with auto-reload")
        uvicorn.run(
            "main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=True,
            reload_dirs=["."],
            log_level="info",
        )
    else:
        from main import app

        logger.info("🏭 Running in production mode")
        uvicorn.run(
            app,
            host=settings.HOST,
            port=settings.PORT,
            log_level="warning",
            access_log=False,
            server_header=False,
        )


if __name__ == "__main__":
    main()
