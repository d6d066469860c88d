from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from . import models  # noqa: F401  registers the tables on Base.metadata
from .config import get_settings
from .database import Base, engine
from .error_handlers import add_error_handlers
from .logging_middleware import add_audit_middleware
from .rate_limit import apply_rate_limiter
from .routers import auth, reviews, services, user_services, users

settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.run_db_migrations:
        Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Users, engraving services, orders and reviews for Deadeye Laserworks",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    apply_rate_limiter(fastapi_app)
    add_audit_middleware(fastapi_app, "laserworks", settings.log_dir)
    add_error_handlers(fastapi_app)

    if settings.metrics_enabled:
        Instrumentator().instrument(fastapi_app).expose(fastapi_app)

    fastapi_app.include_router(auth.router)
    fastapi_app.include_router(users.router)
    fastapi_app.include_router(services.router)
    fastapi_app.include_router(user_services.router)
    fastapi_app.include_router(reviews.router)

    @fastapi_app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok", "service": "laserworks"}

    return fastapi_app


app = create_app()
