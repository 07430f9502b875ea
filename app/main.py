import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from app.api.http import health_router, texts_router
from app.api.http.errors import register_error_handlers
from app.api.middleware import TracingMiddleware
from app.core.config import Settings, settings as default_settings
from app.core.logging import configure_logging
from app.core.telemetry import Telemetry
from app.db.mongo import create_mongo_client
from app.db.repositories import MongoTextRepository
from app.domains.texts.repository import TextRepository

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[TextRepository] = None,
    telemetry: Optional[Telemetry] = None
) -> FastAPI:
    """Сборка приложения.

    Переданные зависимости используются как есть; недостающие создаются
    в lifespan и освобождаются при остановке.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with AsyncExitStack() as stack:
            if app.state.telemetry is None:
                app.state.telemetry = stack.enter_context(Telemetry.from_settings(settings))

            if app.state.text_repository is None:
                client = create_mongo_client(settings)
                stack.push_async_callback(client.close)
                app.state.text_repository = MongoTextRepository(
                    client, settings.mongo_db_name, settings.mongo_collection
                )
                logger.info(
                    f"Using MongoDB collection {settings.mongo_db_name}.{settings.mongo_collection}"
                )

            yield

    app = FastAPI(
        title="Persistence API",
        description="Хранение текстов с распределённой трассировкой",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.telemetry = telemetry
    app.state.text_repository = repository

    app.add_middleware(TracingMiddleware)
    register_error_handlers(app)

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(texts_router)

    return app


app = create_app()


if __name__ == "__main__":
    configure_logging(default_settings.log_level)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
