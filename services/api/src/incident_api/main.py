import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.api.src.incident_api.config import settings
from services.api.src.incident_api.routes import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    if settings.create_tables:
        from services.api.src.incident_api.db.engine import get_engine
        from services.api.src.incident_api.db.models import metadata
        metadata.create_all(get_engine())
        logger.info("database_tables_ready")

    yield


app = FastAPI(title="Incident Triage API", lifespan=lifespan)

# CORS for frontend
cors_origins = [
    "http://localhost:3000",
    "https://localhost:3000",
]

if settings.cors_origin:
    cors_origins.append(settings.cors_origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"service": "incident-triage-api", "docs": "/docs"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
