from app.db.repositories.identifiers import IdentifierCodec, ObjectIdCodec
from app.db.repositories.text_repository import MongoTextRepository

__all__ = [
    "IdentifierCodec",
    "ObjectIdCodec",
    "MongoTextRepository"
]
