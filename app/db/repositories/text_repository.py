import logging
from typing import Any, Optional

from bson.errors import BSONError
from pymongo.errors import PyMongoError

from app.core.errors import BackendError, NotFoundError
from app.db.repositories.identifiers import IdentifierCodec, ObjectIdCodec
from app.domains.texts.entities import TextDocument
from app.domains.texts.repository import TextRepository

logger = logging.getLogger(__name__)

# Ошибки драйвера и сериализации, которые считаются отказом хранилища
BACKEND_ERRORS = (PyMongoError, BSONError)


class MongoTextRepository(TextRepository):
    """Репозиторий текстов поверх коллекции MongoDB.

    Трассировку не ведёт: спаны открывает вызывающая сторона, а активный
    контекст доходит сюда через contextvars.
    """

    def __init__(
        self,
        client: Any,
        db_name: str,
        collection_name: str,
        codec: Optional[IdentifierCodec] = None,
    ):
        self.collection = client[db_name][collection_name]
        self.codec = codec or ObjectIdCodec()

    async def insert(self, document: TextDocument) -> TextDocument:
        """Создание документа; идентификатор выдаёт MongoDB"""
        if document.id is not None:
            logger.debug(f"Ignoring caller-supplied id {document.id} on insert")

        try:
            result = await self.collection.insert_one(self._to_mongo(document))
        except BACKEND_ERRORS as e:
            raise BackendError("insert", e) from e

        return TextDocument(id=self.codec.format(result.inserted_id), text=document.text)

    async def find_by_id(self, document_id: str) -> Optional[TextDocument]:
        """Получение документа по идентификатору"""
        key = self.codec.parse(document_id)

        try:
            raw = await self.collection.find_one({"_id": key})
        except BACKEND_ERRORS as e:
            raise BackendError("find", e) from e

        # Отсутствие документа здесь не ошибка, в отличие от update/delete
        return self._to_domain(raw) if raw else None

    async def update(self, document_id: str, document: TextDocument) -> TextDocument:
        """Замена текста документа"""
        key = self.codec.parse(document_id)

        try:
            result = await self.collection.update_one(
                {"_id": key},
                {"$set": self._to_mongo(document)},
            )
        except BACKEND_ERRORS as e:
            raise BackendError("update", e) from e

        if result.matched_count == 0:
            raise NotFoundError(document_id)

        return TextDocument(id=document_id, text=document.text)

    async def delete(self, document_id: str) -> None:
        """Удаление документа"""
        key = self.codec.parse(document_id)

        try:
            result = await self.collection.delete_one({"_id": key})
        except BACKEND_ERRORS as e:
            raise BackendError("delete", e) from e

        if result.deleted_count == 0:
            raise NotFoundError(document_id)

    def _to_mongo(self, document: TextDocument) -> dict:
        """Поля содержимого без идентификатора"""
        return {"text": document.text}

    def _to_domain(self, raw: dict) -> TextDocument:
        """Преобразование документа MongoDB в доменную сущность"""
        return TextDocument(id=self.codec.format(raw["_id"]), text=raw.get("text", ""))
