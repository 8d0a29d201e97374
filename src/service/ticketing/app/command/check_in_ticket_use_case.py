from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.app.dto.check_in_result import CheckInResult
from src.service.ticketing.app.query.resolve_ticket_code_use_case import resolve_code
from src.service.ticketing.app.service.staff_authorization_gate import StaffAuthorizationGate
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.resolution_kind import ResolutionKind
from src.service.ticketing.domain.value_object.actor_context import ActorContext


NOT_AUTHORIZED_MESSAGE = 'Not authorized to check in this ticket'


class CheckInTicketUseCase:
    """
    Door check-in. `checked_in` only ever goes false -> true; repeating the
    call (or losing a race to another scanner) is reported, not rejected.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    def _gate(self) -> StaffAuthorizationGate:
        return StaffAuthorizationGate(
            event_query_repo=self.uow.event_query_repo,
            staff_application_query_repo=self.uow.staff_application_query_repo,
        )

    @Logger.io
    async def check_in(self, *, ticket_id: int, actor: ActorContext) -> CheckInResult:
        with self.tracer.start_as_current_span(
            'use_case.check_in',
            attributes={'ticket.id': ticket_id, 'actor.id': actor.user_id},
        ):
            async with self.uow:
                ticket = await self.uow.ticket_query_repo.get_by_id(ticket_id=ticket_id)
                if not ticket:
                    raise NotFoundError(f'Ticket not found: {ticket_id}')

                await self._authorize(ticket=ticket, actor=actor)
                result = await self._check_in_one(ticket)
                await self.uow.commit()
            return result

    @Logger.io
    async def check_in_group(self, *, code: str, actor: ActorContext) -> list[CheckInResult]:
        """Check in every ticket a scanned code resolves to; all-or-nothing on authorization."""
        with self.tracer.start_as_current_span(
            'use_case.check_in_group', attributes={'actor.id': actor.user_id}
        ):
            async with self.uow:
                resolution = await resolve_code(
                    code=code,
                    ticket_query_repo=self.uow.ticket_query_repo,
                    event_query_repo=self.uow.event_query_repo,
                )
                if resolution.kind is ResolutionKind.NOT_FOUND:
                    raise NotFoundError('No ticket matches this code')

                for ticket in resolution.tickets:
                    await self._authorize(ticket=ticket, actor=actor)

                results = [await self._check_in_one(ticket) for ticket in resolution.tickets]
                await self.uow.commit()
            return results

    async def _authorize(self, *, ticket: TicketEntity, actor: ActorContext) -> None:
        if not await self._gate().can_check_in(actor=actor, event_id=ticket.event_id):
            metrics.record_check_in(result='forbidden')
            raise ForbiddenError(NOT_AUTHORIZED_MESSAGE)

    async def _check_in_one(self, ticket: TicketEntity) -> CheckInResult:
        assert ticket.id is not None
        if ticket.checked_in:
            metrics.record_check_in(result='already_checked_in')
            return CheckInResult(ticket=ticket, already_checked_in=True)

        updated = await self.uow.ticket_command_repo.mark_checked_in(
            ticket_id=ticket.id, checked_in_at=datetime.now(timezone.utc)
        )
        refreshed = await self.uow.ticket_query_repo.get_by_id(ticket_id=ticket.id) or ticket
        if not updated:
            # another scanner got there first
            metrics.record_check_in(result='already_checked_in')
            return CheckInResult(ticket=refreshed, already_checked_in=True)

        metrics.record_check_in(result='checked_in')
        Logger.base.info(f'✅ [CHECK-IN] Ticket {ticket.id} seat {ticket.seat} checked in')
        return CheckInResult(ticket=refreshed, already_checked_in=False)
