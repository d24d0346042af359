from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from writeflow.backend.db.engine import create_engine, create_session_factory, init_schema
from writeflow.backend.log import setup_logging
from writeflow.backend.managers.config import get_config
from writeflow.backend.settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings)

    database_url = settings.resolve_database_url()
    logger.info("WriteFlow backend starting (host={}, port={})", settings.host, settings.port)

    # -- Database --------------------------------------------------------------
    engine = create_engine(database_url)
    await init_schema(engine)
    _app.state.db_engine = engine
    _app.state.db_session_factory = create_session_factory(engine)

    # -- Configuration (load-or-default, once) ---------------------------------
    async with _app.state.db_session_factory() as db:
        _app.state.app_config = await get_config(db)
    logger.info("Configuration loaded (updated_at={})", _app.state.app_config.updated_at.isoformat())

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("WriteFlow backend shutting down")

    # Dispose DB engine (closes all pooled connections).
    await engine.dispose()
    logger.info("Database: disposed")


app = FastAPI(title="WriteFlow Studio Backend", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Failure -> message translation.  Routers handle the not-found cases they
# know about; anything else that escapes a manager is an operation failure.
# ---------------------------------------------------------------------------


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.opt(exception=exc).error("Storage operation failed")
    return JSONResponse(status_code=500, content={"detail": f"Operation failed: {exc}"})


@app.exception_handler(OSError)
async def io_error_handler(_request: Request, exc: OSError) -> JSONResponse:
    logger.opt(exception=exc).error("File operation failed")
    return JSONResponse(status_code=500, content={"detail": f"Operation failed: {exc}"})


@app.exception_handler(ValueError)
async def data_error_handler(_request: Request, exc: ValueError) -> JSONResponse:
    logger.opt(exception=exc).error("Stored data could not be read")
    return JSONResponse(status_code=500, content={"detail": f"Operation failed: {exc}"})


# ---------------------------------------------------------------------------
# API router -- all command endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


# -- Command routers ---------------------------------------------------------
from writeflow.backend.routers.agents import router as agents_router  # noqa: E402
from writeflow.backend.routers.config import router as config_router  # noqa: E402
from writeflow.backend.routers.documents import router as documents_router  # noqa: E402
from writeflow.backend.routers.projects import router as projects_router  # noqa: E402
from writeflow.backend.routers.providers import router as providers_router  # noqa: E402
from writeflow.backend.routers.system import router as system_router  # noqa: E402
from writeflow.backend.routers.workspaces import router as workspaces_router  # noqa: E402

api.include_router(workspaces_router)
api.include_router(projects_router)
api.include_router(documents_router)
api.include_router(agents_router)
api.include_router(providers_router)
api.include_router(config_router)
api.include_router(system_router)

app.include_router(api)
