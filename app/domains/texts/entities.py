from dataclasses import dataclass
from typing import Optional


@dataclass
class TextDocument:
    text: str
    # выдаётся хранилищем при вставке и больше не меняется
    id: Optional[str] = None

    def is_persisted(self) -> bool:
        return self.id is not None
