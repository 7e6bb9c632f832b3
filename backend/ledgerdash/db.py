from __future__ import annotations

import os
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ledgerdash.settings import get_settings


def _default_sqlite_url() -> str:
    # fallback dev: backend/data/ledgerdash.db
    settings = get_settings()
    db_path = settings.data_dir / "ledgerdash.db"
    return f"sqlite:///{db_path.as_posix()}"


def get_database_url() -> str:
    env = os.getenv("LEDGERDASH_DATABASE_URL")
    if env and env.strip():
        return env.strip()
    return _default_sqlite_url()


def build_engine(url: str) -> Engine:
    # sqlite needs check_same_thread for FastAPI sync access
    connect_args = {}
    kwargs = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty db
            kwargs["poolclass"] = StaticPool

    return create_engine(url, future=True, connect_args=connect_args, **kwargs)


@lru_cache
def get_engine() -> Engine:
    return build_engine(get_database_url())


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


def new_session() -> Session:
    return get_session_factory()()


def init_db(engine: Engine | None = None) -> None:
    # import here to avoid circular imports
    from ledgerdash.db_base import Base
    from ledgerdash.repositories.sql_item_catalog import CatalogItemRow  # noqa: F401
    from ledgerdash.repositories.sql_transaction_store import TransactionRow  # noqa: F401

    Base.metadata.create_all(engine or get_engine())
