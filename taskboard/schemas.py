from datetime import datetime, timezone

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from taskboard.enums import Priority, StatusFilter


def as_utc(value: datetime) -> datetime:
    # naive timestamps are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TodoCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    short_description: str = Field(min_length=1)
    date_time: datetime
    priority: Priority = Priority.MEDIUM
    category: str = Field(default="General", max_length=100)
    tags: list[str] = Field(default_factory=list)

    normalize_date_time = field_validator("date_time")(as_utc)


class TodoUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    short_description: str | None = None
    date_time: datetime | None = None
    is_done: bool | None = None
    priority: Priority | None = None
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = None

    @field_validator("date_time")
    @classmethod
    def normalize_date_time(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        # every column is NOT NULL, so "null" can only mean a client bug
        nulls = sorted(
            to_camel(field)
            for field in self.model_fields_set
            if getattr(self, field) is None
        )
        if nulls:
            raise ValueError(f"{', '.join(nulls)} must not be null")
        return self


class TodoResponse(CamelModel):
    id: int
    name: str
    short_description: str
    date_time: datetime
    is_done: bool
    priority: Priority
    category: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    utc_timestamps = field_validator("date_time", "created_at", "updated_at")(as_utc)


class TodoFilter(BaseModel):
    filter: StatusFilter = StatusFilter.ALL
    search: str | None = None
    category: str | None = None
    priority: Priority | None = None

    @field_validator("filter", mode="before")
    @classmethod
    def unknown_status_means_all(cls, value):
        # anything but done/upcoming lists everything
        if isinstance(value, StatusFilter):
            return value
        if value not in [f.value for f in StatusFilter]:
            return StatusFilter.ALL
        return value

    @field_validator("search", "category", mode="before")
    @classmethod
    def empty_as_missing(cls, value):
        if value == "":
            return None
        return value


class DeleteResponse(BaseModel):
    success: bool = True
