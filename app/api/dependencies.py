from fastapi import Depends, Request

from app.core.telemetry import Telemetry
from app.domains.texts.repository import TextRepository
from app.domains.texts.services import TextService


def get_telemetry(request: Request) -> Telemetry:
    return request.app.state.telemetry


def get_text_repository(request: Request) -> TextRepository:
    return request.app.state.text_repository


def get_text_service(
    repository: TextRepository = Depends(get_text_repository),
    telemetry: Telemetry = Depends(get_telemetry)
) -> TextService:
    return TextService(repository, telemetry)
