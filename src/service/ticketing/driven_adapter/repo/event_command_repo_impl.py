from datetime import datetime, timezone

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.driven_adapter.model.event_model import EventModel
from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import event_model_to_entity


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, event: EventEntity) -> EventEntity:
        event_model = EventModel(
            name=event.name,
            category=event.category,
            location=event.location,
            description=event.description,
            organizer_id=event.organizer_id,
            price=event.price,
            income=event.income,
            seats=event.seats,
            event_start=event.event_start,
            event_end=event.event_end,
            is_deleted=False,
            created_at=event.created_at or datetime.now(timezone.utc),
        )
        self.session.add(event_model)
        await self.session.flush()
        return event_model_to_entity(event_model)

    @Logger.io
    async def increment_income(self, *, event_id: int, delta: int) -> None:
        await self.session.execute(
            update(EventModel)
            .where(EventModel.id == event_id)
            .values(income=EventModel.income + delta)
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def soft_delete(self, *, event_id: int) -> None:
        await self.session.execute(
            update(EventModel)
            .where(EventModel.id == event_id)
            .values(is_deleted=True)
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def hard_delete(self, *, event_id: int) -> None:
        await self.session.execute(
            delete(EventModel)
            .where(EventModel.id == event_id)
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def soft_delete_ended_before(self, *, cutoff: datetime) -> list[int]:
        result = await self.session.execute(
            update(EventModel)
            .where(
                EventModel.is_deleted.is_(False),
                EventModel.event_end.is_not(None),
                EventModel.event_end < cutoff,
            )
            .values(is_deleted=True)
            .returning(EventModel.id)
            .execution_options(synchronize_session=False)
        )
        return sorted(result.scalars().all())
