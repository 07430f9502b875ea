import re
from typing import Protocol, TypeVar

from bson import ObjectId

from app.core.errors import ValidationError

KeyT = TypeVar("KeyT")

# Канонический вид ObjectId: 24 шестнадцатеричных символа в нижнем регистре
_OBJECT_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")


class IdentifierCodec(Protocol[KeyT]):
    """Пара parse/format между внешним строковым идентификатором и ключом хранилища"""

    def parse(self, document_id: str) -> KeyT:
        ...

    def format(self, key: KeyT) -> str:
        ...


class ObjectIdCodec:
    """Преобразование строковых идентификаторов в bson.ObjectId и обратно.

    Принимается только каноническая форма, поэтому format(parse(s)) == s
    для любой принятой строки.
    """

    def parse(self, document_id: str) -> ObjectId:
        if not isinstance(document_id, str) or not _OBJECT_ID_PATTERN.match(document_id):
            raise ValidationError(f"invalid document id '{document_id}'")
        return ObjectId(document_id)

    def format(self, key: ObjectId) -> str:
        return str(key)
