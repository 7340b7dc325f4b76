import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.database import engine, Base
from app.services.statistics_config import load_statistics_config_from_yaml

settings = get_settings()
logger = logging.getLogger(__name__)

logging.getLogger("app").setLevel(settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.statistics_config_path:
        load_statistics_config_from_yaml(settings.statistics_config_path)
        logger.info(
            "Statistics configuration loaded",
            extra={"path": settings.statistics_config_path},
        )

    # Create tables on startup
    async with engine.begin() as conn:
        # Import all models to register them with Base
        from app import models  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Cleanup on shutdown
    await engine.dispose()


app = FastAPI(
    title="Health Tracker API",
    description="Backend API for diet, exercise, sleep, weight and goal tracking with period statistics",
    version="0.1.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "environment": settings.environment}


# API routers
from app.api.v1.router import api_router

app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
