"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before importing modules that read env vars at import time
load_dotenv()

# main.py is at <root>/src/api/main.py, src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.errors import register_exception_handlers
from api.routes import health, users
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import create_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Users API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: the MongoDB client lives exactly as long as the app."""
    client = create_mongodb_client()
    app.state.mongo_client = client
    if client:
        if ensure_all_indexes(client[DATABASE_NAME]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield  # App runs here

    app.state.mongo_client = None
    if client:
        client.close()
        logger.info("MongoDB client closed")


app = FastAPI(
    title=SERVICE_NAME,
    description="CRUD API for users backed by MongoDB",
    version=VERSION,
    lifespan=lifespan,
)
app.state.mongo_client = None


def cors_settings(value: str) -> tuple[list[str], bool]:
    """Parse CORS_ORIGINS into (origins, allow_credentials).

    "*" allows any origin without credentials, since browsers reject
    credentials with a wildcard. Otherwise a comma-separated list of origins
    with credentials; blank entries are skipped.
    """
    if value.strip() == "*":
        return ["*"], False
    origins = [origin.strip() for origin in value.split(",") if origin.strip()]
    return origins, True


cors_origins, allow_credentials = cors_settings(os.getenv("CORS_ORIGINS", "*"))
if allow_credentials:
    logger.info("CORS configured with specific origins", extra={"origins": cors_origins})
else:
    logger.warning("CORS configured with wildcard origin; set CORS_ORIGINS for production")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)

register_exception_handlers(app)

app.include_router(users.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Application logs go through structured logging instead
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
