from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.rule.staff_authorization_rule import can_manage_event
from src.service.ticketing.domain.rule.timestamp_parser import ensure_utc
from src.service.ticketing.domain.value_object.actor_context import ActorContext


class DeleteEventUseCase:
    """
    Explicit deletion by an admin or the owning organizer.

    - no tickets sold: the event row is removed
    - tickets sold and the event is over: tickets are removed, the event is
      soft-deleted and keeps its income
    - tickets sold and the event is still ahead: refused
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete(
        self, *, event_id: int, actor: ActorContext, now: Optional[datetime] = None
    ) -> None:
        now = ensure_utc(now) if now else datetime.now(timezone.utc)

        async with self.uow:
            event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
            if not event or event.is_deleted:
                raise NotFoundError(f'Event not found: {event_id}')

            if not can_manage_event(actor=actor, event_organizer_id=event.organizer_id):
                raise ForbiddenError('Not authorized to delete this event')

            sold = await self.uow.seat_ledger.count_reserved(event_id=event_id)
            if sold == 0:
                await self.uow.staff_application_command_repo.delete_by_event(event_id=event_id)
                await self.uow.event_command_repo.hard_delete(event_id=event_id)
                Logger.base.info(f'🗑️ [EVENT] Event {event_id} removed (no tickets sold)')
            elif event.has_ended(now):
                await self.uow.ticket_command_repo.delete_by_event(event_id=event_id)
                await self.uow.event_command_repo.soft_delete(event_id=event_id)
                Logger.base.info(
                    f'🗑️ [EVENT] Event {event_id} soft-deleted, {sold} tickets removed, '
                    f'income {event.income} kept'
                )
            else:
                raise ConflictError(
                    f'Event {event_id} has {sold} tickets sold and has not ended yet'
                )

            await self.uow.commit()
