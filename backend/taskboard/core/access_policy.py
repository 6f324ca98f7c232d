"""Authorization Policy — the only place role and membership rules are decided.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Board membership and ADMIN role are the only two grounds for board access
    - A missing board is reported as ResourceNotFoundError BEFORE membership is
      evaluated, so a non-existent board never surfaces as 403
    - Role gate ignores membership entirely

Design Decisions:
    - check_* functions raise typed errors instead of returning flags: every
      registry operation calls them before touching the store, so a denial
      short-circuits with no partial side effects
    - can_access_board is the single predicate shared by task read and task create
"""

from collections.abc import Iterable
from uuid import UUID

from taskboard.core.domain_types import Role
from taskboard.core.errors import (
    ErrorContext, ForbiddenError, InvalidOperationError, ResourceNotFoundError,
)
from taskboard.core.repository_protocols import ActorLike, BoardLike


def is_admin(actor: ActorLike) -> bool:
    return actor.role == Role.ADMIN


def can_access_board(actor: ActorLike, member_ids: Iterable[UUID]) -> bool:
    """Board-scope predicate: ADMIN, or the actor's id is in the member set."""
    return is_admin(actor) or actor.id in set(member_ids)


def check_admin(actor: ActorLike) -> None:
    """Role gate: raise ForbiddenError unless the actor is ADMIN."""
    if not is_admin(actor):
        raise ForbiddenError(
            "Administrator role required.",
            ErrorContext(user_id=str(actor.id)),
        )


def check_board_access(
    actor: ActorLike, board: BoardLike | None, board_id: UUID,
) -> BoardLike:
    """Board-scope gate. Existence first (404), then membership (403)."""
    if board is None:
        raise ResourceNotFoundError(
            "Board", str(board_id),
            ErrorContext(user_id=str(actor.id), board_id=str(board_id)),
        )
    if not can_access_board(actor, board.member_ids):
        raise ForbiddenError(
            "Forbidden",
            ErrorContext(user_id=str(actor.id), board_id=str(board_id)),
        )
    return board


def check_not_self(actor: ActorLike, target_id: UUID) -> None:
    """Self-protection: an administrator cannot delete their own identity."""
    if actor.id == target_id:
        raise InvalidOperationError(
            "You cannot delete yourself.",
            ErrorContext(user_id=str(actor.id)),
        )


def board_listing_member_filter(actor: ActorLike) -> UUID | None:
    """Member id to restrict board listings to, or None when every board is visible."""
    return None if is_admin(actor) else actor.id
