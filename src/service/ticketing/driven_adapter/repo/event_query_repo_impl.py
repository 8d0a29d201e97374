from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.rule.storage_id import is_storable_id
from src.service.ticketing.domain.rule.timestamp_parser import ensure_utc
from src.service.ticketing.driven_adapter.model.event_model import EventModel


def event_model_to_entity(event_model: EventModel) -> EventEntity:
    return EventEntity(
        id=event_model.id,
        name=event_model.name,
        category=event_model.category,
        location=event_model.location,
        description=event_model.description,
        organizer_id=event_model.organizer_id,
        price=event_model.price,
        income=event_model.income,
        seats=list(event_model.seats) if event_model.seats is not None else None,
        event_start=ensure_utc(event_model.event_start) if event_model.event_start else None,
        event_end=ensure_utc(event_model.event_end) if event_model.event_end else None,
        is_deleted=event_model.is_deleted,
        created_at=ensure_utc(event_model.created_at) if event_model.created_at else None,
    )


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        if not is_storable_id(event_id):
            return None
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == event_id)
            .execution_options(populate_existing=True)
        )
        event_model = result.scalar_one_or_none()
        if not event_model:
            return None
        return event_model_to_entity(event_model)

    @Logger.io
    async def list_by_ids(self, *, event_ids: list[int]) -> list[EventEntity]:
        event_ids = [event_id for event_id in event_ids if is_storable_id(event_id)]
        if not event_ids:
            return []
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id.in_(event_ids))
            .order_by(EventModel.id)
            .execution_options(populate_existing=True)
        )
        return [event_model_to_entity(model) for model in result.scalars().all()]
