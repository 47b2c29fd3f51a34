"""
Alembic environment configuration.
Migrations run on a SYNC engine (psycopg) while the application itself uses
async SQLAlchemy.
"""

from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from alembic import context

from app.core.config import settings
from app.core.database import Base
import app.models  # noqa: F401 - register every table on Base.metadata

# Alembic Config object
config = context.config


def sync_url(url: str) -> str:
    """Swap the async driver for psycopg, which Alembic needs."""
    if "+asyncpg" in url:
        return url.replace("+asyncpg", "+psycopg")
    if "+aiosqlite" in url:
        return url.replace("+aiosqlite", "")
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


database_url = sync_url(settings.DATABASE_URL_SYNC)

# Attributes avoid ConfigParser interpolation of % in passwords
config.attributes["sqlalchemy.url"] = database_url

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Model's MetaData object for 'autogenerate' support
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Emits SQL to the script output instead of executing it.
    """
    context.configure(
        url=config.attributes["sqlalchemy.url"],
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations with the given connection."""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with a SYNC engine."""
    connectable = create_engine(
        config.attributes["sqlalchemy.url"],
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        do_run_migrations(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
