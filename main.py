from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shortlink_app.config import settings
from shortlink_app.database import connection
from shortlink_app.database.connection import engine, Base
from shortlink_app.api.errors import register_exception_handlers
from shortlink_app.api.middleware import LoggingMiddleware
from shortlink_app.api.v1 import urls, redirect
from shortlink_app.exceptions import StoreUnavailableError
from shortlink_app.logging_config import setup_logging

# Import models to ensure they're registered with Base
from shortlink_app.models import URL

logger = setup_logging(
    level=settings.log_level,
    log_file=settings.log_file,
    json_format=settings.log_json,
)

# Create database tables
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Refuse to start without a reachable database; release the pool on shutdown"""
    try:
        connection.ping_database()
    except SQLAlchemyError as exc:
        logger.error("Database unreachable at startup: %s", exc)
        raise StoreUnavailableError() from exc

    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    yield

    connection.engine.dispose()
    logger.info("%s stopped, connection pool disposed", settings.app_name)


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Collision-free short links with counted redirects",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
register_exception_handlers(app)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint; 503 while the database cannot be reached"""
    try:
        connection.ping_database()
    except SQLAlchemyError as exc:
        logger.warning("Health check failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "unreachable",
                "environment": settings.environment,
            },
        )
    return {"status": "healthy", "database": "ok", "environment": settings.environment}


######## Include routers
app.include_router(urls.router, prefix="/api/v1")
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
