from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from metropower import models  # noqa: F401  registers tables on SQLModel.metadata
from metropower.core.logging import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    kwargs: dict[str, object] = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in {"sqlite://", "sqlite:///"}:
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(database_url, **kwargs)


def init_db(engine: Engine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    SQLModel.metadata.create_all(engine)
    logger.info("db.init tables=%s", ",".join(sorted(SQLModel.metadata.tables)))


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    with Session(engine, expire_on_commit=False) as session:
        yield session
