# alliance_wars/main.py
# Start the server with: uvicorn alliance_wars.main:app --reload --host 0.0.0.0
import logging
import logging.config
import json
import pathlib
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute

from alliance_wars.core.config import settings
from alliance_wars.api import admin as admin_router
from alliance_wars.api import commands as commands_router
from alliance_wars.crud import crud_system
from alliance_wars.db.base import Base  # Registers every table on Base.metadata
from alliance_wars.db.session import SessionLocal, engine

_api_stats = {"total_requests": 0, "errors_5xx": 0}

async def metrics_middleware(request: Request, call_next):
    _api_stats["total_requests"] += 1
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            _api_stats["errors_5xx"] += 1
        return response
    except Exception as e:
        _api_stats["errors_5xx"] += 1
        # Keep a record of anything that escaped the route handlers
        try:
            db = SessionLocal()
            crud_system.create_alert(db, "CRITICAL", "Unhandled Exception in Middleware", str(e))
            db.close()
        except Exception as alert_e:
            logger.critical(f"FATAL: Could not log unhandled exception to DB: {alert_e}")
        raise e

def configure_logging_from_file():
    """Loads logging configuration from the JSON file next to this module."""
    config_file = pathlib.Path(__file__).parent / "logging_config.json"
    try:
        with open(config_file) as f_in:
            config = json.load(f_in)

        log_dir = pathlib.Path("logs")
        log_dir.mkdir(exist_ok=True)

        logging.config.dictConfig(config)
    except FileNotFoundError:
        print(f"ERROR: Logging configuration file not found at {config_file}. Falling back to basic stdout logging.")
        logging.basicConfig(level=logging.INFO, format='%(levelname)-8s [%(name)s] %(message)s')
        logging.getLogger("alliance_wars.main.logging_setup_fallback").error("Logging configuration file missing.", exc_info=True)
    except json.JSONDecodeError as e:
        print(f"ERROR: Failed to parse logging configuration file {config_file}: {e}. Falling back to basic stdout logging.")
        logging.basicConfig(level=logging.INFO, format='%(levelname)-8s [%(name)s] %(message)s')
        logging.getLogger("alliance_wars.main.logging_setup_fallback").error("Logging configuration JSON error.", exc_info=True)
    except Exception as e:
        print(f"ERROR: Failed to configure logging from file: {e}. Falling back to basic stdout logging.")
        logging.basicConfig(level=logging.INFO, format='%(levelname)-8s [%(name)s] %(message)s')
        logging.getLogger("alliance_wars.main.logging_setup_fallback").error("General logging configuration failed.", exc_info=True)


configure_logging_from_file()
logger = logging.getLogger("alliance_wars.main")  # Logger for this module

def create_tables():
    Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup sequence initiated...")
    create_tables()
    logger.info("Database tables checked/created.")
    yield
    logger.info(
        f"Application shutdown sequence initiated... "
        f"({_api_stats['total_requests']} requests, {_api_stats['errors_5xx']} server errors)"
    )

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)
app.middleware("http")(metrics_middleware)

# Include Routers
app.include_router(commands_router.router, prefix=settings.API_V1_STR, tags=["Game"])
app.include_router(admin_router.protected_router, prefix="/admin", include_in_schema=False)

logger.info("--- FastAPI Registered Routes ---")
for route in app.routes:
    if isinstance(route, APIRoute):
        logger.info(f"Path: {route.path}, Methods: {route.methods}, Name: {route.name}")
logger.info("--- End Registered Routes ---")


@app.get(settings.API_V1_STR + "/health", tags=["Health Check"])
async def health_check():
    return {"status": "healthy", "project": settings.PROJECT_NAME}
