"""FastAPI application entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from gift_registry.config import settings
from gift_registry.database import Base, engine
from gift_registry.logging_config import setup_logging

# Import routers
from gift_registry.routers import access, event, gifts, contributions, admin, moderation, profiles, auth

# Import all models so Base.metadata knows about them
import gift_registry.models  # noqa: F401


app = FastAPI(
    title="Gift Registry",
    description="Event gift registry with guest admission, gift reservation and contribution verification",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(access.router, prefix="/api", tags=["Access"])
app.include_router(event.router, prefix="/api", tags=["Event"])
app.include_router(gifts.router, prefix="/api/gifts", tags=["Gifts"])
app.include_router(contributions.router, prefix="/api/contributions", tags=["Contributions"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(moderation.router, prefix="/api/moderation", tags=["Moderation"])
app.include_router(profiles.router, prefix="/api/profiles", tags=["Profiles"])
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])


@app.on_event("startup")
def on_startup():
    """Configure logging and create database tables (for SQLite dev mode)."""
    setup_logging()
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
