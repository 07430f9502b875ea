from pymongo import AsyncMongoClient

from app.core.config import Settings


def create_mongo_client(settings: Settings) -> AsyncMongoClient:
    """Асинхронный клиент MongoDB; timeoutMS задаёт дедлайн каждой операции"""
    return AsyncMongoClient(settings.mongo_url, timeoutMS=settings.mongo_timeout_ms)
