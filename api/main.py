"""FastAPI application for the Portfolio API."""

import asyncio
from contextlib import asynccontextmanager

import fastapi
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.database import (
    create_engine,
    create_session_maker,
    dispose_engine,
    init_db,
)
from core.errors import (
    ApiError,
    api_error_handler,
    database_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from core.logger import configure_logging, get_logger
from core.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from core.ratelimit import limiter, rate_limit_exceeded_handler
from routes import (
    contact_router,
    health_router,
    profile_router,
    projects_router,
    skills_router,
)
from services.seed_service import run_seed

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Create DB engine and schema at startup, dispose on shutdown."""
    settings = get_settings()
    app.state.engine = create_engine()
    app.state.session_maker = create_session_maker(app.state.engine)

    app.state.init_done = False
    app.state.init_error = None

    try:
        async with asyncio.timeout(60):
            await init_db(app.state.engine)
            if settings.seed_database:
                await run_seed(app.state.session_maker)

        app.state.init_done = True
        logger.info("init.complete", seeded=settings.seed_database)
    except TimeoutError:
        logger.error(
            "init.timeout",
            hint="Startup hung - check DB connectivity",
        )
        raise RuntimeError("Application startup timed out")
    except Exception as e:
        app.state.init_error = str(e)
        logger.error("init.failed", error=str(e), exc_info=True)
        raise

    try:
        yield
    finally:
        await dispose_engine(app.state.engine)


_settings = get_settings()

app = fastapi.FastAPI(
    title="Portfolio API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if _settings.enable_docs or _settings.debug else None,
    redoc_url="/redoc" if _settings.enable_docs or _settings.debug else None,
    openapi_url=("/openapi.json" if _settings.enable_docs or _settings.debug else None),
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.add_middleware(GZipMiddleware, minimum_size=500)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-Id"],
    expose_headers=["X-Request-Id"],
    max_age=600,
)
# Wraps CORS so preflights carry the request id; turns unhandled errors into
# a 500 envelope before they reach the outer server-error layer
app.add_middleware(RequestContextMiddleware)
# Outermost so the 500 envelope gets security headers too
app.add_middleware(SecurityHeadersMiddleware)

app.include_router(health_router)
app.include_router(projects_router)
app.include_router(skills_router)
app.include_router(profile_router)
app.include_router(contact_router)
