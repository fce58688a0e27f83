from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging

from medicall.config.settings import Settings, settings as default_settings
from medicall.core.middleware import request_logging_middleware
from medicall.core.websocket_manager import ConnectionManager
from medicall.db.base import create_tables, get_engine, get_session_factory
from medicall.routes.doctors.router import router as doctors_router
from medicall.routes.procedures.router import router as procedures_router
from medicall.routes.realtime.router import router as realtime_router

# -------------------------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------------------------
logging.basicConfig(
    level=default_settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------------------
# Start-up / shutdown
# -------------------------------------------------------------------------------------
async def startup(app: FastAPI) -> None:
    """Create engine, tables, session factory and broadcaster on ``app.state``."""
    cfg: Settings = app.state.settings
    engine = None
    try:
        logger.info("Initializing Database Engine...")
        engine = await get_engine(cfg.database_url)
        app.state.engine = engine

        await create_tables(engine)
        logger.info("Database schema in sync.")

        session_factory = await get_session_factory(engine)
        app.state.session_factory = session_factory
        logger.info("DB session factory ready.")
    except Exception as e:
        logger.critical(f"CRITICAL ERROR DURING STARTUP: {e}", exc_info=True)
        if engine:  # Attempt to clean up engine if it was created
            try:
                await engine.dispose()
                logger.info("Disposed engine after startup failure.")
            except Exception as dispose_e:
                logger.error(f"Error disposing engine after startup failure: {dispose_e}")
        raise  # stop the server from starting half-initialised

    app.state.broadcaster = ConnectionManager()


async def shutdown(app: FastAPI) -> None:
    engine = getattr(app.state, "engine", None)
    if engine:
        try:
            await engine.dispose()
            logger.info("DB engine disposed")
        except Exception:
            logger.exception("Error disposing DB engine")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application start-up & shutdown hooks."""
    logger.info("Application startup …")
    await startup(app)
    yield
    logger.info("Application shutdown …")
    await shutdown(app)
    logger.info("Shutdown complete")


# -------------------------------------------------------------------------------------
# FastAPI application factory
# -------------------------------------------------------------------------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    cfg = settings or default_settings

    app = FastAPI(title="MediCall CRM Sync API", lifespan=lifespan)
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(o) for o in cfg.cors_origins],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_logging_middleware)

    @app.get("/health")
    async def health_check(request: Request):
        manager = getattr(request.app.state, "broadcaster", None)
        return {
            "status": "ok",
            "database": "ready" if getattr(request.app.state, "session_factory", None) else "not ready",
            "realtime_clients": manager.get_connection_count() if manager else 0,
        }

    app.include_router(doctors_router, prefix=cfg.api_prefix)
    app.include_router(procedures_router, prefix=cfg.api_prefix)
    app.include_router(realtime_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
