from datetime import date
from logging.config import fileConfig
from pathlib import Path

import taskboard.models  # noqa: F401  registers all models on Base.metadata
from alembic import context
from taskboard.core.database import Base, engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

VERSIONS_DIR = Path(__file__).parent / "versions"


def next_revision_id(today: date | None = None) -> str:
    # taskboard migrations are named <day>_<serial>, e.g. 2026_10_19_001
    day = (today or date.today()).strftime("%Y_%m_%d")
    serials = [
        int(path.name[len(day) + 1 : len(day) + 4])
        for path in VERSIONS_DIR.glob(f"{day}_[0-9][0-9][0-9]_*.py")
    ]
    return f"{day}_{max(serials, default=0) + 1:03d}"


def use_dated_revision_id(context, revision, directives):
    if directives:
        directives[0].rev_id = next_revision_id()


def run_migrations_offline() -> None:
    """Emit SQL for the migrations without connecting to the database."""
    context.configure(
        url=engine.url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        process_revision_directives=use_dated_revision_id,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # The URL comes from taskboard settings (DATABASE_URL), not alembic.ini,
    # so reuse the application engine instead of engine_from_config().
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
            process_revision_directives=use_dated_revision_id,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
