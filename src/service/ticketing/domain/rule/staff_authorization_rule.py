from typing import Optional

from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.actor_context import ActorContext


def can_check_in(
    *,
    actor: ActorContext,
    event_organizer_id: Optional[int],
    application_status: Optional[StaffApplicationStatus],
) -> bool:
    """First match wins; anything unmatched is denied."""
    if actor.role is UserRole.ADMIN:
        return True
    if actor.role is UserRole.ORGANIZER:
        return event_organizer_id is not None and event_organizer_id == actor.user_id
    if actor.role is UserRole.STAFF:
        return application_status is StaffApplicationStatus.APPROVED
    return False


def can_manage_event(*, actor: ActorContext, event_organizer_id: Optional[int]) -> bool:
    if actor.role is UserRole.ADMIN:
        return True
    return actor.role is UserRole.ORGANIZER and event_organizer_id == actor.user_id
