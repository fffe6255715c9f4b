import json
import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from taskboard.core.config import settings

logger = logging.getLogger(__name__)

SEED_FILE = Path(__file__).parent.parent.parent / "seed_data.json"

# SQLite connections are shared across FastAPI's threadpool workers
connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

# Create the SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

# Create sessionmaker factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


# Dependency to get a database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    # important: ensures models are registered before creating tables
    import taskboard.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized")


# seed_db() - ONLY loads data, and only into an empty table
def seed_db(seed_file: Path = SEED_FILE):
    from taskboard.models import Todo
    from taskboard.schemas import TodoCreate
    from taskboard.services.todo_crud import create_todo

    session = SessionLocal()
    try:
        if session.query(Todo).count() > 0:
            return
        if not seed_file.exists():
            logger.warning("Seed file %s not found, skipping", seed_file)
            return

        todos_data = json.loads(seed_file.read_text())
        for todo_data in todos_data:
            create_todo(session, TodoCreate.model_validate(todo_data))
        logger.info("Loaded %d seed todos", len(todos_data))
    finally:
        session.close()
