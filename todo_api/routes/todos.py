"""
Todo API - Todo Route Handlers
================================

What:  CRUD endpoints for todos.
How:   Each handler works against the abstract TodoRepository injected by
       `get_todo_repository`; it never knows which backend is active.

    POST   /todos          → 201 + Todo
    GET    /todos          → 200 + [Todo]
    GET    /todos/{id}     → 200 + Todo
    PATCH  /todos/{id}     → 200 + Todo
    DELETE /todos/{id}     → 204, empty body

Error responses (handled by global exception handlers):
    HTTP 400: Body is not the expected JSON (MalformedBodyError)
    HTTP 422: Body violates a field constraint (ValidationFailedError)
    HTTP 404: Unknown id or backend failure (RepositoryError)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from todo_api.context import get_todo_repository
from todo_api.repositories.base import TodoRepository
from todo_api.schemas.common import ErrorResponse
from todo_api.schemas.todo import CreateTodo, Todo, UpdateTodo
from todo_api.validation import ValidatedJson

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["Todos"])

_NOT_FOUND = {404: {"description": "Todo not found", "model": ErrorResponse}}
_BODY_ERRORS = {
    400: {"description": "Malformed JSON body", "model": ErrorResponse},
    422: {"description": "Field constraint violated", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    response_model=Todo,
    responses={**_BODY_ERRORS, **_NOT_FOUND},
    summary="Create a todo",
)
async def create_todo(
    payload: CreateTodo = Depends(ValidatedJson(CreateTodo)),
    repository: TodoRepository = Depends(get_todo_repository),
) -> Todo:
    return await repository.create(payload)


@router.get(
    "",
    response_model=List[Todo],
    responses=_NOT_FOUND,
    summary="List all todos",
)
async def all_todo(
    repository: TodoRepository = Depends(get_todo_repository),
) -> List[Todo]:
    return await repository.all()


@router.get(
    "/{todo_id}",
    response_model=Todo,
    responses=_NOT_FOUND,
    summary="Get a single todo by ID",
)
async def find_todo(
    todo_id: int,
    repository: TodoRepository = Depends(get_todo_repository),
) -> Todo:
    return await repository.find(todo_id)


@router.patch(
    "/{todo_id}",
    response_model=Todo,
    responses={**_BODY_ERRORS, **_NOT_FOUND},
    summary="Update a todo",
    description="Fields omitted from the body keep their stored value. The path ID decides which todo is updated.",
)
async def update_todo(
    todo_id: int,
    payload: UpdateTodo = Depends(ValidatedJson(UpdateTodo)),
    repository: TodoRepository = Depends(get_todo_repository),
) -> Todo:
    if payload.id is not None and payload.id != todo_id:
        logger.debug("Ignoring body id %d for PATCH /todos/%d", payload.id, todo_id)
    return await repository.update(todo_id, payload)


@router.delete(
    "/{todo_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a todo",
)
async def delete_todo(
    todo_id: int,
    repository: TodoRepository = Depends(get_todo_repository),
) -> Response:
    await repository.delete(todo_id)
    return Response(status_code=204)
