from typing import Optional

from opentelemetry import trace

from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_staff_application_query_repo import (
    IStaffApplicationQueryRepo,
)
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.rule.staff_authorization_rule import can_check_in
from src.service.ticketing.domain.value_object.actor_context import ActorContext


class StaffAuthorizationGate:
    """
    Loads what the check-in rule needs and applies it. Read-only.

    Built from the repositories of the caller's unit of work so the decision is
    taken inside the same transaction as the check-in.
    """

    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        staff_application_query_repo: IStaffApplicationQueryRepo,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.staff_application_query_repo = staff_application_query_repo
        self.tracer = trace.get_tracer(__name__)

    async def can_check_in(self, *, actor: ActorContext, event_id: int) -> bool:
        with self.tracer.start_as_current_span(
            'gate.can_check_in',
            attributes={'actor.id': actor.user_id, 'actor.role': actor.role.value},
        ):
            organizer_id: Optional[int] = None
            application_status: Optional[StaffApplicationStatus] = None

            if actor.role is UserRole.ORGANIZER:
                event = await self.event_query_repo.get_by_id(event_id=event_id)
                organizer_id = event.organizer_id if event else None
            elif actor.role is UserRole.STAFF:
                application = await self.staff_application_query_repo.get_by_event_and_staff(
                    event_id=event_id, staff_id=actor.user_id
                )
                application_status = application.status if application else None

            return can_check_in(
                actor=actor,
                event_organizer_id=organizer_id,
                application_status=application_status,
            )
