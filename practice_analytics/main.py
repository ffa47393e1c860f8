from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from practice_analytics import __version__
from practice_analytics.config import get_settings
from practice_analytics.database.connection import init_db
from practice_analytics.exceptions import ConfigurationError
from practice_analytics.routers import analytics, health, interviews
from practice_analytics.utils.logging_config import setup_logging
from practice_analytics.utils.logger import get_logger

# Setup logging configuration
setup_logging()
# Get logger instance
logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_settings()
    
    errors = settings.validate_configuration()
    if errors:
        raise ConfigurationError("Invalid configuration", context={"errors": errors})
    
    app = FastAPI(
        title="Practice Analytics API",
        description="Longitudinal performance analytics for interview practice.",
        version=__version__
    )
    
    app.add_middleware(CORSMiddleware, **settings.cors_config)
    
    app.include_router(health.router)
    app.include_router(interviews.router)
    if settings.ENABLE_ANALYTICS_ROUTES:
        app.include_router(analytics.router)
        logger.info("✅ Analytics routes enabled")
    else:
        logger.info("❌ Analytics routes disabled")
    
    @app.on_event("startup")
    async def startup():
        init_db()
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
