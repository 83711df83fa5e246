"""API routes for todo management."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ..models.todo import ID_MAX, ID_MIN, ErrorResponse, MessageResponse, Todo, TodoCreate, TodoUpdate
from ..services.todo_service import TodoService
from .dependencies import get_todo_service

router = APIRouter()

TodoId = Annotated[int, Path(ge=ID_MIN, le=ID_MAX)]

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/todos", response_model=List[Todo], responses={500: {"model": ErrorResponse}})
async def get_todos(service: TodoService = Depends(get_todo_service)) -> List[Todo]:
    """Get all todo items ordered by id."""
    return await service.get_todos()


@router.post(
    "/todos",
    response_model=Todo,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_todo(
    todo_data: TodoCreate,
    service: TodoService = Depends(get_todo_service),
) -> Todo:
    """Create a new todo item."""
    try:
        return await service.create_todo(todo_data)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/todos/{todo_id}", response_model=Todo, responses=_ERROR_RESPONSES)
async def update_todo(
    todo_id: TodoId,
    todo_data: TodoUpdate,
    service: TodoService = Depends(get_todo_service),
) -> Todo:
    """Set the completion flag of an existing todo item."""
    todo = await service.set_completed(todo_id, todo_data)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    return todo


@router.delete("/todos/{todo_id}", response_model=MessageResponse, responses=_ERROR_RESPONSES)
async def delete_todo(
    todo_id: TodoId,
    service: TodoService = Depends(get_todo_service),
) -> MessageResponse:
    """Delete a todo item."""
    success = await service.delete_todo(todo_id)
    if not success:
        raise HTTPException(status_code=404, detail="Todo not found")
    return MessageResponse(message="Todo deleted")
