"""tubeSentry Backend - YouTube 新视频 WebSub 订阅服务入口。"""

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.routing import APIRoute
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.database.session import check_db_health, init_db
from src.core.infrastructure.health import HealthReport
from src.core.infrastructure.logging import setup_logging
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
)
from src.core.interfaces.http.routers import api_router
from src.modules.youtube.application import dependencies as youtube_app_deps
from src.modules.youtube.infrastructure import dependencies as youtube_infra_deps
from src.modules.youtube.interfaces.websub_router import router as websub_router


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting tubeSentry backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Websub callback host: {settings.PUBLIC_HOST}")

    logger.info("Initializing database connection...")
    await init_db()

    yield

    logger.info("Shutting down tubeSentry backend...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="YouTube 新视频通知：WebSub 订阅管理、推送接收与通知入队",
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[youtube_app_deps.get_channel_subscription_repository] = (
    youtube_infra_deps.get_channel_subscription_repository
)
app.dependency_overrides[youtube_app_deps.get_youtube_announcement_repository] = (
    youtube_infra_deps.get_youtube_announcement_repository
)
app.dependency_overrides[youtube_app_deps.get_websub_client] = (
    youtube_infra_deps.get_websub_client
)
app.dependency_overrides[youtube_app_deps.get_premium_status_provider] = (
    youtube_infra_deps.get_premium_status_provider
)
app.dependency_overrides[youtube_app_deps.get_notification_queue] = (
    youtube_infra_deps.get_notification_queue
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# CORS middleware
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Hub 回调挂在根路径，与订阅时提交的 hub.callback 一致
app.include_router(websub_router)
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["health"], response_model=HealthReport)
async def health_check() -> HealthReport:
    """Health check endpoint."""
    return HealthReport.from_database(
        await check_db_health(),
        environment=settings.ENVIRONMENT,
        version=app.version,
    )


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to tubeSentry API",
        "docs": f"{settings.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
