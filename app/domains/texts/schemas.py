from pydantic import BaseModel, ConfigDict


class TextBase(BaseModel):
    """Базовая схема текста"""
    text: str


class SaveTextRequest(TextBase):
    """Тело запроса POST /save-text"""
    pass


class TextUpdate(TextBase):
    """Схема для обновления текста"""
    pass


class SaveTextResponse(BaseModel):
    """Ответ на сохранение текста"""
    status: str
    id: str


class TextResponse(TextBase):
    """Схема для ответа с данными текста"""
    id: str

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    error: str
