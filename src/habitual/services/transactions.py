"""Translate storage failures raised inside a unit of work into engine errors."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..domain.repositories import UnitOfWork, UnitOfWorkFactory
from ..errors import ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(
    uow_factory: UnitOfWorkFactory, *, conflict_message: Optional[str] = None
) -> Iterator[UnitOfWork]:
    """Run a block inside one unit of work.

    The factory rolls back on any exception. An ``IntegrityError`` becomes
    ``ConflictError(conflict_message)`` when a message is given; every other
    ``SQLAlchemyError`` becomes ``StoreUnavailableError``. Engine errors raised
    by the block pass through unchanged.
    """

    try:
        with uow_factory() as uow:
            yield uow
    except IntegrityError as exc:
        if conflict_message is None:
            logger.error("Integrity violation", exc_info=True)
            raise StoreUnavailableError("Storage rejected the write") from exc
        logger.warning(conflict_message, extra={"constraint_error": str(exc.orig)})
        raise ConflictError(conflict_message) from exc
    except SQLAlchemyError as exc:
        logger.error("Storage failure, transaction rolled back", exc_info=True)
        raise StoreUnavailableError("Storage is temporarily unavailable") from exc
