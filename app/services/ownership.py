"""
Ownership checks for event mutations.
"""

import logging

from ..core.exceptions import UnauthorizedError
from ..models.event import Event

logger = logging.getLogger(__name__)


def ensure_owner(event: Event, actor_id: int, action: str = "modify"):
    """
    Allow the mutation only if ``actor_id`` created the event.

    Must be called on an event that was already resolved from the store and
    before any of its fields are touched.

    Args:
        event: Existing event
        actor_id: Identifier supplied by the caller
        action: Verb phrase used in the error message

    Raises:
        UnauthorizedError: If the actor is not the event's creator
    """
    if not event.is_owned_by(actor_id):
        logger.warning(f"User {actor_id} tried to {action} event {event.id} owned by user {event.created_by}")
        raise UnauthorizedError(f"You are not allowed to {action} this event")
