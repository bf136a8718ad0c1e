# path: unitrack/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from unitrack.app_logging import configure_logging, get_logger
from unitrack.core.api import router as api_router
from unitrack.core.api.errors import register_exception_handlers
from unitrack.core.config import Settings, settings as default_settings
from unitrack.core.models import DatabaseHelper

log = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    log.info({"event": "app_started", "db": app.state.db_helper.engine.url.render_as_string(hide_password=True)})
    yield
    # shutdown
    await app.state.db_helper.dispose()
    log.info({"event": "app_stopped"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Точка входа: здесь открывается подключение к БД и здесь же (lifespan) закрывается.

    settings можно передать явно (тесты), иначе берётся конфиг из окружения.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title="unitrack",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_helper = DatabaseHelper.from_config(settings.db)

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


# Экспортируемый объект приложения
main_app = create_app()


if __name__ == "__main__":
    # Запуск: uvicorn unitrack.main:main_app --reload
    uvicorn.run(
        "unitrack.main:main_app",
        host=default_settings.run.host,
        port=default_settings.run.port,
        reload=True,
    )
