"""
Todo API - Label Route Handlers
=================================

    POST   /labels         → 201 + Label
    GET    /labels         → 200 + [Label]
    DELETE /labels/{id}    → 204, empty body
"""

from typing import List

from fastapi import APIRouter, Depends, Response

from todo_api.context import get_label_repository
from todo_api.repositories.base import LabelRepository
from todo_api.schemas.common import ErrorResponse
from todo_api.schemas.label import CreateLabel, Label
from todo_api.validation import ValidatedJson

router = APIRouter(prefix="/labels", tags=["Labels"])

_NOT_FOUND = {404: {"description": "Label not found", "model": ErrorResponse}}


@router.post(
    "",
    status_code=201,
    response_model=Label,
    responses={
        400: {"description": "Malformed JSON body", "model": ErrorResponse},
        422: {"description": "Field constraint violated", "model": ErrorResponse},
        **_NOT_FOUND,
    },
    summary="Create a label",
)
async def create_label(
    payload: CreateLabel = Depends(ValidatedJson(CreateLabel)),
    repository: LabelRepository = Depends(get_label_repository),
) -> Label:
    return await repository.create(payload)


@router.get("", response_model=List[Label], responses=_NOT_FOUND, summary="List all labels")
async def all_label(
    repository: LabelRepository = Depends(get_label_repository),
) -> List[Label]:
    return await repository.all()


@router.delete(
    "/{label_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a label",
)
async def delete_label(
    label_id: int,
    repository: LabelRepository = Depends(get_label_repository),
) -> Response:
    await repository.delete(label_id)
    return Response(status_code=204)
