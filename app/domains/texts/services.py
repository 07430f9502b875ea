import logging
from typing import Optional

from app.core.errors import NotFoundError, TextStoreError
from app.core.telemetry import Telemetry
from app.domains.texts.entities import TextDocument
from app.domains.texts.repository import TextRepository

logger = logging.getLogger(__name__)


class TextService:
    """Сервис для работы с текстами.

    Каждая операция выполняется внутри собственного спана, дочернего
    к активному (обычно к серверному спану HTTP-запроса).
    """

    def __init__(self, repository: TextRepository, telemetry: Telemetry):
        self.repository = repository
        self.telemetry = telemetry

    async def save_text(self, text: str) -> TextDocument:
        """Сохранение нового текста"""
        with self.telemetry.start_operation("save-text", {"text.length": len(text)}) as span:
            document = TextDocument(text=text)
            span.add_event("input validated")

            try:
                saved = await self.repository.insert(document)
            except TextStoreError as e:
                logger.error(f"Failed to save text: {e}")
                raise

            span.set_attribute("document.id", saved.id)
            span.add_event("document saved")
            logger.info(f"Text saved as {saved.id}")
            return saved

    async def get_text(self, document_id: str) -> Optional[TextDocument]:
        """Получение текста по идентификатору; None, если не найден"""
        with self.telemetry.start_operation("find-text", {"document.id": document_id}) as span:
            document = await self.repository.find_by_id(document_id)
            span.add_event("lookup completed", {"found": document is not None})
            if document is None:
                logger.info(f"Text {document_id} not found")
            return document

    async def update_text(self, document_id: str, text: str) -> TextDocument:
        """Замена содержимого текста"""
        attributes = {"document.id": document_id, "text.length": len(text)}
        with self.telemetry.start_operation("update-text", attributes) as span:
            try:
                updated = await self.repository.update(document_id, TextDocument(text=text))
            except NotFoundError:
                logger.info(f"Text {document_id} not found for update")
                raise

            span.add_event("write committed")
            logger.info(f"Text {document_id} updated")
            return updated

    async def delete_text(self, document_id: str) -> None:
        """Удаление текста"""
        with self.telemetry.start_operation("delete-text", {"document.id": document_id}) as span:
            try:
                await self.repository.delete(document_id)
            except NotFoundError:
                logger.info(f"Text {document_id} not found for delete")
                raise

            span.add_event("document deleted")
            logger.info(f"Text {document_id} deleted")
