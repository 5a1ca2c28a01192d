from fastapi import FastAPI

from teamdash.api.routes.analytics import router as analytics_router
from teamdash.api.routes.health import router as health_router
from teamdash.api.routes.notes import router as notes_router
from teamdash.api.routes.ranking import router as ranking_router
from teamdash.api.routes.report import router as report_router
from teamdash.core.logging import get_logger
from teamdash.core.logging import setup_logging
from teamdash.core.middleware import GitHubFanoutRateLimitMiddleware
from teamdash.core.observability import init_sentry
from teamdash.settings import Settings


def create_app() -> FastAPI:
    """Build the API with logging, Sentry and rate limiting configured."""

    settings = Settings()
    setup_logging(settings.log_level)
    sentry_enabled = init_sentry(settings)

    app = FastAPI(title="teamdash")
    app.add_middleware(
        GitHubFanoutRateLimitMiddleware,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.include_router(health_router)
    app.include_router(analytics_router)
    app.include_router(ranking_router)
    app.include_router(report_router)
    app.include_router(notes_router)

    get_logger(__name__).info(
        "app_created",
        environment=settings.environment,
        sentry_enabled=sentry_enabled,
        roster_size=len(settings.team_users),
    )
    return app


app = create_app()
