"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url

from parking_reservations.api.v1.router import api_router
from parking_reservations.config import Settings, settings
from parking_reservations.core.domain import SlotStatus
from parking_reservations.core.errors import ParkingError
from parking_reservations.db.session import create_engine, create_sessionmaker, create_tables
from parking_reservations.services.parking_manager import ParkingManager
from parking_reservations.services.store import InMemoryStore, SqlAlchemyStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _ensure_sqlite_directory(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


async def build_manager(config: Settings):
    """Create the state manager and its store. Returns (manager, engine or None)."""
    engine = None
    if config.STORE_BACKEND == "memory":
        store = InMemoryStore()
    else:
        _ensure_sqlite_directory(config.DATABASE_URL)
        engine = create_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)
        await create_tables(engine)
        store = SqlAlchemyStore(create_sessionmaker(engine))

    manager = ParkingManager(store, config.ADMIN_USERNAME, config.ADMIN_PASSWORD)
    await manager.load()

    if not manager.list_slots() and config.SEED_SLOT_COUNT > 0:
        await manager.seed_slots(
            config.SEED_SLOT_COUNT,
            {SlotStatus.OCCUPIED: config.SEED_OCCUPIED_COUNT},
            config.SEED_ROW_WIDTH,
        )
    return manager, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events."""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    manager, engine = await build_manager(settings)
    app.state.manager = manager

    yield

    # Shutdown
    logger.info("Shutting down...")
    manager.logout()
    if engine is not None:
        await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ParkingError)
async def parking_error_handler(request: Request, exc: ParkingError):
    """Render state manager failures as JSON errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# Include routers
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


def run():
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
