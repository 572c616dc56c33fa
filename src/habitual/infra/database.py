"""Database infrastructure: engine, schema, and unit of work."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..domain.repositories import UnitOfWorkFactory
from .repositories import (
    SQLModelCompletionRepository,
    SQLModelFeedRepository,
    SQLModelFollowRepository,
    SQLModelHabitRepository,
    SQLModelUserRepository,
)


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""
    engine_options = config.sqlalchemy_engine_options()
    return create_engine(config.DATABASE_URL, **engine_options)


def init_database(engine: Engine) -> None:
    """Initialize database schema."""
    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


class SQLModelUnitOfWork:
    """Repositories sharing one SQLModel session and therefore one transaction."""

    def __init__(self, session: Session):
        self.session = session
        self.habits = SQLModelHabitRepository(session)
        self.completions = SQLModelCompletionRepository(session)
        self.users = SQLModelUserRepository(session)
        self.follows = SQLModelFollowRepository(session)
        self.feed = SQLModelFeedRepository(session)


def create_uow_factory(engine: Engine) -> UnitOfWorkFactory:
    """Create a unit-of-work factory bound to ``engine``."""

    @contextmanager
    def factory() -> Iterator[SQLModelUnitOfWork]:
        """Open a session, commit on success, roll back on any exception."""
        session = Session(engine, expire_on_commit=False)
        try:
            yield SQLModelUnitOfWork(session)
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple[Engine, UnitOfWorkFactory]:
    """Convenience bootstrap for engine + unit-of-work factory with schema init.

    Returns (engine, uow_factory).
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_uow_factory(engine)
