class TextStoreError(Exception):
    """Базовая ошибка операций хранения текстов"""


class ValidationError(TextStoreError):
    """Некорректный ввод, отклонённый до обращения к хранилищу"""


class NotFoundError(TextStoreError):
    """Документ с указанным идентификатором не найден"""

    def __init__(self, document_id: str):
        super().__init__(f"no document found with id '{document_id}'")
        self.document_id = document_id


class BackendError(TextStoreError):
    """Ошибка, сообщённая хранилищем документов"""

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause

    @property
    def timed_out(self) -> bool:
        # PyMongoError выставляет timeout для сетевых и серверных дедлайнов
        return bool(getattr(self.cause, "timeout", False))
