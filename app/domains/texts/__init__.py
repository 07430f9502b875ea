from app.domains.texts.entities import TextDocument
from app.domains.texts.repository import TextRepository
from app.domains.texts.schemas import (
    TextBase, SaveTextRequest, TextUpdate, SaveTextResponse,
    TextResponse, ErrorResponse
)
from app.domains.texts.services import TextService

__all__ = [
    "TextDocument",
    "TextRepository",
    "TextBase", "SaveTextRequest", "TextUpdate", "SaveTextResponse",
    "TextResponse", "ErrorResponse",
    "TextService"
]
