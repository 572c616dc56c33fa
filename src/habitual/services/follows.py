"""Follow request state machine.

A relationship row is created PENDING and moves to ACCEPTED or REJECTED when
the target responds. Only a REJECTED row can be re-requested; the same row is
reused and goes back to PENDING.
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..domain.repositories import UnitOfWorkFactory
from ..errors import ConflictError, InvalidArgumentError, InvalidStateError, NotFoundError
from ..models.follow import FollowRelationship, FollowStatus
from .periods import to_storage
from .transactions import unit_of_work

logger = logging.getLogger(__name__)

DUPLICATE_REQUEST = "Follow request already sent or already following this user"
ALREADY_RESPONDED = "Follow request already responded to"
_RESPONSES = {FollowStatus.ACCEPTED, FollowStatus.REJECTED}


def _coerce_action(action: FollowStatus | str) -> FollowStatus:
    try:
        status = FollowStatus(action)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid action: {action}") from exc
    if status not in _RESPONSES:
        raise InvalidArgumentError(f"Invalid action: {action}")
    return status


def send_follow_request(
    follower_id: int,
    target_user_id: int,
    now: datetime,
    *,
    uow_factory: UnitOfWorkFactory,
) -> FollowRelationship:
    """Ask to follow ``target_user_id``.

    Raises:
        InvalidArgumentError: follower and target are the same user.
        NotFoundError: the target user does not exist.
        ConflictError: a pending or accepted relationship already exists.
    """

    if follower_id == target_user_id:
        raise InvalidArgumentError("You cannot follow yourself")

    stamp = to_storage(now)
    with unit_of_work(uow_factory, conflict_message=DUPLICATE_REQUEST) as uow:
        if uow.users.get_by_id(target_user_id) is None:
            raise NotFoundError("User not found")

        existing = uow.follows.get_by_pair(target_user_id, follower_id)
        if existing is not None:
            if existing.status != FollowStatus.REJECTED:
                logger.warning(
                    DUPLICATE_REQUEST,
                    extra={"relationship_id": existing.id, "status": existing.status.value},
                )
                raise ConflictError(DUPLICATE_REQUEST)
            relationship = uow.follows.update_fields(
                existing, status=FollowStatus.PENDING, updated_at=stamp
            )
            logger.info("Follow request reopened", extra={"relationship_id": relationship.id})
            return relationship

        relationship = uow.follows.create(
            FollowRelationship(
                target_user_id=target_user_id,
                follower_id=follower_id,
                status=FollowStatus.PENDING,
                created_at=stamp,
                updated_at=stamp,
            )
        )
        logger.info(
            "Follow request sent",
            extra={"relationship_id": relationship.id, "target_user_id": target_user_id},
        )
        return relationship


def respond_to_follow_request(
    request_id: int,
    responding_user_id: int,
    action: FollowStatus | str,
    now: datetime,
    *,
    uow_factory: UnitOfWorkFactory,
) -> FollowRelationship:
    """Accept or reject a pending request addressed to ``responding_user_id``.

    Raises:
        InvalidArgumentError: ``action`` is neither ACCEPTED nor REJECTED.
        NotFoundError: no such request, or it targets someone else.
        InvalidStateError: the request was already answered.
    """

    status = _coerce_action(action)
    with unit_of_work(uow_factory) as uow:
        relationship = uow.follows.get_for_update(request_id)
        if relationship is None or relationship.target_user_id != responding_user_id:
            raise NotFoundError("Follow request not found")
        if relationship.status != FollowStatus.PENDING:
            raise InvalidStateError(ALREADY_RESPONDED)
        # The row lock is a no-op on SQLite; the conditional write is what
        # stops a second concurrent response there.
        if not uow.follows.resolve_pending(relationship, status, to_storage(now)):
            logger.warning(ALREADY_RESPONDED, extra={"relationship_id": request_id})
            raise InvalidStateError(ALREADY_RESPONDED)
    logger.info(
        "Follow request answered",
        extra={"relationship_id": request_id, "status": status.value},
    )
    return relationship


def get_follow_requests(user_id: int, *, uow_factory: UnitOfWorkFactory) -> list[FollowRelationship]:
    """Pending requests waiting for ``user_id`` to answer."""

    with unit_of_work(uow_factory) as uow:
        return uow.follows.list_by_target(user_id, FollowStatus.PENDING)


def get_followers(user_id: int, *, uow_factory: UnitOfWorkFactory) -> list[FollowRelationship]:
    with unit_of_work(uow_factory) as uow:
        return uow.follows.list_by_target(user_id, FollowStatus.ACCEPTED)


def get_following(user_id: int, *, uow_factory: UnitOfWorkFactory) -> list[FollowRelationship]:
    with unit_of_work(uow_factory) as uow:
        return uow.follows.list_by_follower(user_id, FollowStatus.ACCEPTED)


__all__ = [
    "ALREADY_RESPONDED",
    "DUPLICATE_REQUEST",
    "get_follow_requests",
    "get_followers",
    "get_following",
    "respond_to_follow_request",
    "send_follow_request",
]
