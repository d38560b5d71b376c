"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from livecomment.core.config import settings
from livecomment.core.errors import register_exception_handlers
from livecomment.core.logging import log_info, setup_logging
from livecomment.core.metrics import get_content_type, get_metrics, set_app_info
from livecomment.core.middleware import (
    CorrelationIdMiddleware,
    MetricsMiddleware,
    RequestLoggingMiddleware,
)
from livecomment.modules.auth import SessionGate
from livecomment.modules.comment.router import router as livecomment_router
from livecomment.modules.moderation.router import router as moderation_router
from livecomment.modules.report.router import router as report_router
from livecomment.modules.user import AvatarStore, ProfileResolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the fallback avatar before serving; a failure aborts startup."""
    if getattr(app.state, "profile_resolver", None) is None:
        avatar_store = AvatarStore.from_path(settings.FALLBACK_AVATAR_PATH)
        app.state.profile_resolver = ProfileResolver(avatar_store)
    log_info(logger, "Livecomment API started", version=settings.VERSION)
    yield


def create_app(
    avatar_store: Optional[AvatarStore] = None,
    session_gate: Optional[SessionGate] = None,
) -> FastAPI:
    """Build the application.

    Args:
        avatar_store: Pre-built avatar store; loaded from
            ``FALLBACK_AVATAR_PATH`` at startup when omitted
        session_gate: Session verifier; built from ``SECRET_KEY`` when omitted
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Livestream comments with NG word moderation and abuse reports.",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "livecomments", "description": "Posting and listing livecomments"},
            {"name": "moderation", "description": "NG word registration and listing"},
            {"name": "reports", "description": "Abuse reports against livecomments"},
        ],
        lifespan=lifespan,
    )

    app.state.session_gate = session_gate or SessionGate(
        settings.SECRET_KEY,
        ttl_seconds=settings.SESSION_TTL_SECONDS,
    )
    app.state.profile_resolver = (
        ProfileResolver(avatar_store) if avatar_store is not None else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(MetricsMiddleware)

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/metrics", tags=["health"], include_in_schema=False)
    async def prometheus_metrics() -> Response:
        """Prometheus metrics in text exposition format."""
        return Response(content=get_metrics(), media_type=get_content_type())

    app.include_router(livecomment_router, prefix=settings.API_V1_PREFIX)
    app.include_router(report_router, prefix=settings.API_V1_PREFIX)
    app.include_router(moderation_router, prefix=settings.API_V1_PREFIX)

    return app


setup_logging(
    level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL,
    json_format=settings.LOG_JSON,
    include_stack_trace=True,
)

set_app_info(
    version=settings.VERSION,
    environment="development" if settings.DEBUG else "production",
)

app = create_app()
