"""
CRUD LAYER (Database Logic Only)

Architecture:
    API Layer  -> FastAPI (routes, Depends, response_model)
    CRUD Layer -> Pure DB operations (this file)
    DB Layer   -> Engine, SessionLocal, Models

Rules:
- Accept the SQLAlchemy Session explicitly; never open/close it here.
- Return ORM models, not Pydantic schemas.
- Reads don't commit. Writes always commit.
- "Not found" is None/False; the API layer turns it into an HTTP response.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import case, or_
from sqlalchemy.orm import Session

from taskboard.enums import Priority, StatusFilter
from taskboard.models import Todo
from taskboard.schemas import TodoCreate, TodoFilter, TodoUpdate

logger = logging.getLogger(__name__)

# Enum columns sort by their stored text, so rank explicitly
PRIORITY_RANK = case(*[(Todo.priority == p, p.rank) for p in Priority])


def build_filter_clauses(filters: TodoFilter, now: datetime | None = None) -> list:
    """
    Translate a TodoFilter into SQLAlchemy predicates, to be AND-ed together.

    ``now`` pins the instant used by the "upcoming" filter.
    """
    clauses = []

    if filters.filter is StatusFilter.DONE:
        clauses.append(Todo.is_done.is_(True))
    elif filters.filter is StatusFilter.UPCOMING:
        now = now or datetime.now(timezone.utc)
        clauses.append(Todo.is_done.is_(False))
        clauses.append(Todo.date_time > now)

    if filters.search:
        clauses.append(
            or_(
                Todo.name.icontains(filters.search, autoescape=True),
                Todo.short_description.icontains(filters.search, autoescape=True),
            )
        )

    if filters.category:
        clauses.append(Todo.category == filters.category)

    if filters.priority:
        clauses.append(Todo.priority == filters.priority)

    return clauses


def list_todos(
    session: Session,
    filters: TodoFilter | None = None,
    now: datetime | None = None,
) -> list[Todo]:
    # list todo items, most urgent first, then soonest first
    filters = filters or TodoFilter()
    clauses = build_filter_clauses(filters, now=now)
    logger.debug("Listing todos with %s", filters.model_dump(exclude_none=True))

    return (
        session.query(Todo)
        .filter(*clauses)
        .order_by(PRIORITY_RANK.desc(), Todo.date_time.asc(), Todo.id.asc())
        .all()
    )


def list_categories(session: Session) -> list[str]:
    # distinct categories currently in use
    rows = session.query(Todo.category).distinct().order_by(Todo.category).all()
    return [category for (category,) in rows]


def create_todo(session: Session, todo: TodoCreate) -> Todo:
    # create a new todo item; new items always start undone
    todo_item = Todo(**todo.model_dump(), is_done=False)
    session.add(todo_item)
    session.commit()
    session.refresh(todo_item)
    return todo_item


def get_todo(session: Session, todo_id: int) -> Todo | None:
    return session.get(Todo, todo_id)


def update_todo(session: Session, todo_id: int, todo: TodoUpdate) -> Todo | None:
    # partial update: only fields the client actually sent are touched
    todo_item = session.get(Todo, todo_id)
    if not todo_item:
        return None

    for key, value in todo.model_dump(exclude_unset=True).items():
        setattr(todo_item, key, value)

    session.commit()
    session.refresh(todo_item)
    return todo_item


def delete_todo(session: Session, todo_id: int) -> bool:
    # hard delete; there is no soft-delete for todos
    todo_item = session.get(Todo, todo_id)
    if not todo_item:
        return False

    session.delete(todo_item)
    session.commit()
    return True
