from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Integer,
    String,
    Text,
    func,
)

from taskboard.core.database import Base
from taskboard.enums import Priority


class Todo(Base):
    """
    Model for a TODO.
    Note: The class name is singular (Todo) while the table name is plural (todos).
    """

    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    short_description = Column(Text, nullable=False)
    # stored as UTC; SQLite drops the offset, see schemas.TodoResponse
    date_time = Column(DateTime(timezone=True), nullable=False, index=True)
    is_done = Column(Boolean, nullable=False, default=False)
    priority = Column(
        Enum(Priority, name="priority"),
        nullable=False,
        default=Priority.MEDIUM,
    )
    category = Column(String(100), nullable=False, default="General", index=True)
    # JSON rather than ARRAY so the same model runs on SQLite and Postgres
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Todo id={self.id} name={self.name!r} is_done={self.is_done}>"
