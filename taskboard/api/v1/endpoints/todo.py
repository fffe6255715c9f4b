import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.core.database import get_db
from taskboard.enums import Priority
from taskboard.schemas import (
    DeleteResponse,
    TodoCreate,
    TodoFilter,
    TodoResponse,
    TodoUpdate,
)
from taskboard.services.todo_crud import (
    create_todo,
    delete_todo,
    list_todos,
    update_todo,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def storage_error(session: Session, detail: str) -> HTTPException:
    logger.exception(detail)
    session.rollback()
    return HTTPException(status_code=500, detail=detail)


# list TODO items, optionally narrowed by status, search text, category, priority
@router.get("", response_model=list[TodoResponse], status_code=200)
def list_todos_endpoint(
    session: Session = Depends(get_db),
    filter: str | None = Query(
        default=None,
        description="done (completed) or upcoming (open and scheduled in the future); anything else lists all.",
    ),
    search: str | None = Query(
        default=None,
        description="Case-insensitive match on name or short description.",
    ),
    category: str | None = Query(default=None),
    priority: Priority | None = Query(default=None),
):
    filters = TodoFilter(
        filter=filter,
        search=search,
        category=category,
        priority=priority,
    )
    try:
        return list_todos(session, filters)
    except SQLAlchemyError as exc:
        raise storage_error(session, "Failed to fetch todos") from exc


# create a new TODO item
@router.post(
    "",
    response_model=TodoResponse,
    status_code=201,
)
def create_todo_endpoint(
    todo: TodoCreate,
    session: Session = Depends(get_db),
):
    try:
        todo_item = create_todo(session, todo)
    except SQLAlchemyError as exc:
        raise storage_error(session, "Failed to create todo") from exc
    logger.info("Created todo %s", todo_item.id)
    return todo_item


# update a TODO item by id (partial)
@router.put(
    "/{todo_id}",
    response_model=TodoResponse,
    status_code=200,
)
def update_todo_endpoint(
    todo_id: int,
    todo: TodoUpdate,
    session: Session = Depends(get_db),
):
    try:
        todo_item = update_todo(session, todo_id, todo)
    except SQLAlchemyError as exc:
        raise storage_error(session, "Failed to update todo") from exc
    if not todo_item:
        raise HTTPException(
            status_code=404,
            detail="Todo not found or update failed",
        )
    return todo_item


# delete a TODO item by id
@router.delete(
    "/{todo_id}",
    response_model=DeleteResponse,
    status_code=200,
)
def delete_todo_endpoint(
    todo_id: int,
    session: Session = Depends(get_db),
):
    try:
        deleted = delete_todo(session, todo_id)
    except SQLAlchemyError as exc:
        raise storage_error(session, "Failed to delete todo") from exc
    if not deleted:
        raise HTTPException(
            status_code=404,
            detail="Todo not found or delete failed",
        )
    logger.info("Deleted todo %s", todo_id)
    return DeleteResponse(success=True)
