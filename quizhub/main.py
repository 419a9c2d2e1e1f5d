import uvicorn
from fastapi import FastAPI

from quizhub.api.routes.health import router as health_router
from quizhub.api.routes.quizzes import router as quizzes_router
from quizhub.api.routes.realtime_ws import router as realtime_router
from quizhub.api.routes.tournaments import router as tournaments_router
from quizhub.api.routes.users import router as users_router
from quizhub.core.config import get_settings
from quizhub.core.logging import configure_logging
from quizhub.realtime.hub import TournamentChannelHub


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, sql_echo=settings.database_echo)

    app = FastAPI(
        title="QuizHub Tournament API",
        version="0.1.0",
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )
    app.state.channel_hub = TournamentChannelHub(queue_size=settings.realtime_queue_size)

    app.include_router(health_router)
    app.include_router(quizzes_router)
    app.include_router(tournaments_router)
    app.include_router(users_router)
    app.include_router(realtime_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "quizhub.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
