"""Render every API error as ``{"error": "<message>"}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

PRIORITY_MESSAGE = "Priority must be LOW, MEDIUM, HIGH, or URGENT"

# body messages differ between create (POST) and partial update (PUT)
CREATE_MESSAGES = {
    "name": "Name is required",
    "shortDescription": "Short description is required",
    "dateTime": "Valid dateTime is required",
    "priority": PRIORITY_MESSAGE,
    "category": "Category must be a string",
    "tags": "Tags must be an array",
}
UPDATE_MESSAGES = {
    "name": "Name must be a string",
    "shortDescription": "Short description must be a string",
    "dateTime": "dateTime must be a valid ISO8601 date",
    "isDone": "isDone must be boolean",
    "priority": PRIORITY_MESSAGE,
    "category": "Category must be a string",
    "tags": "Tags must be an array",
}
PARAM_MESSAGES = {
    ("path", "todo_id"): "Valid id required",
    ("query", "priority"): PRIORITY_MESSAGE,
}


def message_for(error: dict, method: str) -> str:
    loc = error.get("loc", ())
    msg = error.get("msg", "Invalid value")
    if len(loc) < 2:
        return msg

    where, field = loc[0], loc[1]
    if where == "body" and isinstance(field, str):
        table = CREATE_MESSAGES if method == "POST" else UPDATE_MESSAGES
        # over-long strings keep pydantic's wording
        if field in table and error.get("type") != "string_too_long":
            return table[field]
    elif (where, field) in PARAM_MESSAGES:
        return PARAM_MESSAGES[(where, field)]

    # drop the "body"/"query"/"path" prefix, keep the field name
    return f"{'.'.join(str(part) for part in loc[1:])}: {msg}"


def format_validation_errors(exc: RequestValidationError, method: str = "POST") -> str:
    messages = []
    for error in exc.errors():
        message = message_for(error, method)
        if message not in messages:
            messages.append(message)
    return ", ".join(messages)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = format_validation_errors(exc, request.method)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
