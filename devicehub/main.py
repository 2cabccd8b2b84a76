# devicehub/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from devicehub.core.config import get_settings
from devicehub.database import build_engine, create_db_and_tables
from devicehub.error_handlers import register_error_handlers

# Routers
from devicehub.routers.auth import router as auth_router
from devicehub.routers.protected import router as protected_router
from devicehub.routers.roles import router as roles_router
from devicehub.routers.subscribers import router as subscribers_router
from devicehub.routers.users import router as users_router
from devicehub.routers.devices import router as devices_router
from devicehub.routers.assignments import router as assignments_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Build the pooled engine, verify DB connectivity and create tables.

    Shutdown:
      - Dispose the engine (closes pooled connections).
    """
    logger.info("Startup: connecting to database...")
    engine = build_engine(settings)
    try:
        create_db_and_tables(engine)
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        engine.dispose()
        raise
    app.state.engine = engine
    yield
    engine.dispose()
    logger.info("Shutdown: engine disposed.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(protected_router, prefix=settings.API_PREFIX)
app.include_router(roles_router, prefix=settings.API_PREFIX)
app.include_router(subscribers_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)
app.include_router(devices_router, prefix=settings.API_PREFIX)
app.include_router(assignments_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "devicehub"}
