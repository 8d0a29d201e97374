from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.rule.timestamp_parser import parse_event_timestamp
from src.service.ticketing.domain.value_object.actor_context import ActorContext


class CreateEventUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create(
        self,
        *,
        actor: ActorContext,
        name: str,
        price: int,
        category: str = '',
        location: str = '',
        description: str = '',
        seats: Optional[list[str]] = None,
        event_start: Optional[str] = None,
        event_end: Optional[str] = None,
    ) -> EventEntity:
        if actor.role not in (UserRole.ORGANIZER, UserRole.ADMIN):
            raise ForbiddenError('Only organizers can create events')

        # Timestamps are normalized here, once; storage only ever sees UTC
        event = EventEntity.create(
            name=name,
            organizer_id=actor.user_id,
            price=price,
            category=category,
            location=location,
            description=description,
            seats=seats,
            event_start=parse_event_timestamp(
                event_start, default_timezone=settings.EVENT_DEFAULT_TIMEZONE
            ),
            event_end=parse_event_timestamp(
                event_end, default_timezone=settings.EVENT_DEFAULT_TIMEZONE
            ),
        )

        async with self.uow:
            created = await self.uow.event_command_repo.create(event=event)
            await self.uow.commit()

        Logger.base.info(f'🗓️ [EVENT] Organizer {actor.user_id} created event {created.id}')
        return created
