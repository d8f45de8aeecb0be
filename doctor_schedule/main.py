from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from datetime import datetime
from typing import Optional
import logging

# Load environment variables as early as possible
load_dotenv()

from .application.ports.schedule_repo import ScheduleRepository
from .core.config import Settings, get_calendar_config, settings as default_settings
from .exceptions import http_exception_handler
from .infrastructure.fixtures.fixture_schedule_repository import load_fixture_repository
from .middleware import ErrorHandlingMiddleware, LoggingMiddleware, SecurityMiddleware
from .routers import schedule_router

logging.basicConfig(
    level=getattr(logging, default_settings.LOG_LEVEL.upper(), logging.INFO),
    format=default_settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


def create_app(settings: Settings = default_settings, repository: Optional[ScheduleRepository] = None) -> FastAPI:
    """Build the API; `repository` replaces the fixture file (tests, alternative data)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME}...")
        if repository is None:
            # FixtureLoadError aborts startup
            app.state.repository = load_fixture_repository(settings.FIXTURES_PATH)
        else:
            app.state.repository = repository
        app.state.calendar_config = get_calendar_config(settings)
        yield
        logger.info(f"Shutting down {settings.APP_NAME}...")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=("/docs" if settings.DOCS_ENABLED else None),
        redoc_url=("/redoc" if settings.DOCS_ENABLED else None),
        openapi_url=("/openapi.json" if settings.DOCS_ENABLED else None)
    )

    app.add_exception_handler(HTTPException, http_exception_handler)

    app.add_middleware(ErrorHandlingMiddleware, debug=settings.DEBUG)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(schedule_router.router)

    @app.get("/health")
    def health_check():
        repo = getattr(app.state, "repository", None)
        return {
            "status": "healthy" if repo is not None else "degraded",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now().isoformat(),
            "fixtures": {
                "doctors": len(repo.doctors()) if repo is not None else 0,
                "patients": len(repo.patients()) if repo is not None else 0,
                "appointments": len(repo.appointments()) if repo is not None else 0,
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "doctor_schedule.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower()
    )
