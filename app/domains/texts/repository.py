from abc import ABC, abstractmethod
from typing import Optional

from app.domains.texts.entities import TextDocument


class TextRepository(ABC):
    """Контракт хранилища текстов, не зависящий от конкретной базы.

    Идентификаторы на границе контракта - непрозрачные строки; их синтаксис
    определяет реализация. Контекст вызова (активный спан, отмена) передаётся
    неявно: через contextvars и отмену asyncio-задачи.
    """

    @abstractmethod
    async def insert(self, document: TextDocument) -> TextDocument:
        """Сохранение нового документа.

        Поле id входного документа игнорируется; возвращается документ
        с идентификатором, выданным хранилищем.
        Raises BackendError.
        """

    @abstractmethod
    async def find_by_id(self, document_id: str) -> Optional[TextDocument]:
        """Поиск документа по идентификатору.

        Отсутствие документа - не ошибка: возвращается None.
        Raises ValidationError, BackendError.
        """

    @abstractmethod
    async def update(self, document_id: str, document: TextDocument) -> TextDocument:
        """Замена содержимого документа; идентификатор не меняется.

        Raises ValidationError, NotFoundError, BackendError.
        """

    @abstractmethod
    async def delete(self, document_id: str) -> None:
        """Удаление документа.

        Raises ValidationError, NotFoundError, BackendError.
        """
