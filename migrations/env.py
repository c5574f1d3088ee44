from dotenv import load_dotenv
from logging.config import fileConfig
from sqlalchemy import pool, create_engine
from sqlalchemy.engine import URL, make_url
from alembic import context
import logging
import os

from arab_insights.core.database import Base
from arab_insights.models.db import (
    forecast,
    news_article,
    summary,
    system_setting,
    text_analysis,
)  # ensure models are imported

# Load env vars early
load_dotenv(".env.local")

# Set Alembic config
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")
target_metadata = Base.metadata


def _database_url() -> URL:
    # Alembic runs sync: swap the async driver for psycopg2
    if os.getenv("DATABASE_URL"):
        url = make_url(os.environ["DATABASE_URL"])
        if url.drivername.startswith("postgresql"):
            url = url.set(drivername="postgresql+psycopg2")
        return url
    return URL.create(
        drivername="postgresql+psycopg2",
        username=os.getenv("POSTGRES_USER"),
        password=os.getenv("POSTGRES_PASSWORD"),
        host=os.getenv("POSTGRES_HOST"),
        port=os.getenv("POSTGRES_PORT"),
        database=os.getenv("POSTGRES_DB"),
    )


DATABASE_URL = _database_url()
logger.info(f"📦 Alembic using: {DATABASE_URL.render_as_string(hide_password=True)}")

# Set override in case other Alembic utils need it
config.set_main_option(
    "sqlalchemy.url",
    DATABASE_URL.render_as_string(hide_password=False).replace("%", "%%"),
)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    engine = create_engine(DATABASE_URL, poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
