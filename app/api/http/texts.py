from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_text_service
from app.core.errors import NotFoundError
from app.domains.texts.schemas import (
    ErrorResponse, SaveTextRequest, SaveTextResponse, TextResponse, TextUpdate
)
from app.domains.texts.services import TextService

router = APIRouter(tags=["texts"])

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post("/save-text", response_model=SaveTextResponse, responses=ERROR_RESPONSES)
async def save_text(
    text_data: SaveTextRequest,
    text_service: TextService = Depends(get_text_service)
):
    """Сохранение нового текста"""
    document = await text_service.save_text(text_data.text)

    return SaveTextResponse(
        status=f"Text '{document.text}' saved",
        id=document.id
    )


@router.get("/texts/{text_id}", response_model=TextResponse, responses=ERROR_RESPONSES)
async def get_text(
    text_id: str,
    text_service: TextService = Depends(get_text_service)
):
    """Получение текста по идентификатору"""
    document = await text_service.get_text(text_id)

    # Репозиторий не считает отсутствие ошибкой, а для HTTP это 404
    if document is None:
        raise NotFoundError(text_id)

    return TextResponse(id=document.id, text=document.text)


@router.put("/texts/{text_id}", response_model=TextResponse, responses=ERROR_RESPONSES)
async def update_text(
    text_id: str,
    update_data: TextUpdate,
    text_service: TextService = Depends(get_text_service)
):
    """Обновление текста"""
    document = await text_service.update_text(text_id, update_data.text)

    return TextResponse(id=document.id, text=document.text)


@router.delete(
    "/texts/{text_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES
)
async def delete_text(
    text_id: str,
    text_service: TextService = Depends(get_text_service)
):
    """Удаление текста"""
    await text_service.delete_text(text_id)
