import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(settings.log_dir)
if not _LOG_DIR.is_absolute():
    _LOG_DIR = Path(__file__).resolve().parent.parent / _LOG_DIR
_LOG_DIR.mkdir(parents=True, exist_ok=True)

_log_level = getattr(logging, os.environ.get("LOG_LEVEL", settings.log_level).upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "tripoptimizer.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

from app import models  # noqa: E402,F401  (registers tables on Base.metadata)
from app.database import Database  # noqa: E402
from app.routers import activities, bookings, itinerary, trip_options, trips  # noqa: E402

logger = logging.getLogger(__name__)


def create_app(config: Settings | None = None, database: Database | None = None) -> FastAPI:
    config = config or settings
    database = database or Database(config.database_url, echo=config.database_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.connect(create_schema=config.auto_create_schema)
        logger.info("Datastore connected")
        yield
        await database.dispose()
        logger.info("Datastore closed")

    app = FastAPI(
        title="TripOptimizer",
        description="Trip planning and itinerary API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"success": False, "error": "Invalid request", "details": jsonable_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc) or "Internal error"})

    app.include_router(trips.router, prefix="/api/trips", tags=["trips"])
    app.include_router(trip_options.router, prefix="/api/trip-options", tags=["trip-options"])
    app.include_router(activities.router, prefix="/api/activities", tags=["activities"])
    app.include_router(bookings.router, prefix="/api/bookings", tags=["bookings"])
    app.include_router(itinerary.router, prefix="/api/itinerary", tags=["itinerary"])

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "service": "tripoptimizer"}

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


app = create_app()
