from fastapi import APIRouter

from taskboard.api.v1.endpoints.category import router as category_router
from taskboard.api.v1.endpoints.todo import router as todo_router

router = APIRouter()
router.include_router(todo_router, prefix="/todos", tags=["todos"])
router.include_router(category_router, prefix="/categories", tags=["categories"])
