"""FastAPI application entry point."""

import os
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before importing modules that read env vars (like api.security)
load_dotenv()

from api.errors import request_validation_handler
from api.routes import auth, health
from api.routes import property as property_routes
from utils.logging import setup_structured_logging
from adapter.external.r2_object_store import R2ObjectStore
from adapter.external.smtp_mail_sender import SMTPMailSender
from adapter.mongodb.connection import DatabaseUnavailableError, connect
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "RentSetu API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open process-wide resources once and hand them to request dependencies."""
    try:
        client, db = connect()
    except DatabaseUnavailableError as e:
        logger.critical("MongoDB connection error, shutting down", extra={"error": str(e)})
        raise SystemExit(1)

    if ensure_all_indexes(db):
        logger.info("MongoDB indexes verified/created successfully")
    else:
        logger.warning("Failed to create some MongoDB indexes")

    try:
        mail_sender = SMTPMailSender.from_env()
        object_store = R2ObjectStore.from_env()
    except ValueError as e:
        logger.critical("Invalid configuration, shutting down", extra={"error": str(e)})
        client.close()
        raise SystemExit(1)

    app.state.mongo_client = client
    app.state.db = db
    app.state.mail_sender = mail_sender
    app.state.object_store = object_store

    yield  # App runs here

    client.close()


app = FastAPI(
    title=SERVICE_NAME,
    description="Property rental backend - account signup, sessions and listing registration",
    version=VERSION,
    lifespan=lifespan,
)

# When using JWT authentication with Authorization header:
# - If CORS_ORIGINS="*": allow_credentials must be False (browsers don't support credentials with wildcard)
# - If CORS_ORIGINS is a specific list: allow_credentials can be True
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)

# Register routes
app.include_router(auth.router)
app.include_router(property_routes.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint to check if the server is live."""
    return {
        "message": "Welcome to the RentSetu API. Server is live!",
        "service": SERVICE_NAME,
        "version": VERSION,
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 5000))
    # Application logs (via our structured logging) replace uvicorn's access log
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
