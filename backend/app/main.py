import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import settings
from app.database import Database
from app.errors import NotesError
from app.middleware.rate_limit import limiter
from app.routers import attachments, folders, notes, sync
from app.services.bootstrap import bootstrap_store

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent


def run_migrations(database_url: str) -> None:
    alembic_cfg = Config(str(BACKEND_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database(settings.database_url, busy_timeout=settings.sqlite_busy_timeout)
    if settings.run_migrations:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, run_migrations, settings.database_url)
        logger.info("Migrations applied")
    else:
        await database.create_all()
    await bootstrap_store(database)
    app.state.database = database

    yield

    await database.dispose()


app = FastAPI(title="Notes Sync API", lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(NotesError)
async def handle_notes_error(request: Request, exc: NotesError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", extra={"path": request.url.path, "detail": exc.detail})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def log_unhandled_exceptions(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception", extra={"path": request.url.path, "method": request.method})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(folders.router)
app.include_router(notes.router)
app.include_router(attachments.router)
app.include_router(sync.router)


@app.get("/health")
async def health() -> dict:
    return {"status": "healthy", "service": "Notes Sync Backend"}
