"""Alembic environment for the notice schema.

Invoked through ``upgrade_head``. When the importer already holds an engine the
connection is handed over in ``config.attributes["connection"]`` and no second
engine is created.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from alembic import context
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import make_url

from noticeingest.adapters.sqlalchemy import mapper_registry, start_mappers
from noticeingest.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config

log = logging.getLogger("alembic.env")

start_mappers()

target_metadata = mapper_registry.metadata


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_config().uri


def _notice_schema_options(dialect_name: str) -> dict[str, Any]:
    # SQLite cannot ALTER constraints in place, so its migrations copy tables
    return {
        "target_metadata": target_metadata,
        "render_as_batch": dialect_name == "sqlite",
        "compare_type": True,
        "compare_server_default": True,
    }


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_notice_schema_options(connection.dialect.name))
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit the notice schema as SQL without a live database."""

    url = _database_url()
    context.configure(
        url=url,
        literal_binds=True,
        **_notice_schema_options(make_url(url).get_backend_name()),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Upgrade the notice database, reusing the caller's connection when given."""

    existing_connection = config.attributes.get("connection")
    if existing_connection is not None:
        _migrate(existing_connection)
        return

    engine = create_engine(_database_url(), poolclass=pool.NullPool, future=True)
    log.info("Migrating %s", engine.url.render_as_string(hide_password=True))
    try:
        with engine.connect() as connection:
            _migrate(connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    log.info("Running migrations offline")
    run_migrations_offline()
else:
    run_migrations_online()
