"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .domain.repositories import UnitOfWorkFactory
from .infra.database import bootstrap_database


@dataclass
class AppContext:
    """Configuration plus the store handles every service call needs."""

    config: BaseConfig
    engine: Engine
    uow_factory: UnitOfWorkFactory

    @property
    def tz(self) -> tzinfo:
        return self.config.tz


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, ensure the schema, and build the unit-of-work factory."""

    if config is None:
        config = BaseConfig()

    engine, uow_factory = bootstrap_database(config)
    return AppContext(config=config, engine=engine, uow_factory=uow_factory)
