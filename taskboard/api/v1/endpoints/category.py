import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.core.database import get_db
from taskboard.services.todo_crud import list_categories

logger = logging.getLogger(__name__)

router = APIRouter()


# distinct categories in use, for filter drop-downs
@router.get("", response_model=list[str], status_code=200)
def list_categories_endpoint(
    session: Session = Depends(get_db),
):
    try:
        return list_categories(session)
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch categories")
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch categories",
        ) from exc
