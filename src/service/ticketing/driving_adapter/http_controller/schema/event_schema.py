from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.ticketing.app.dto.reserved_seats_result import ReservedSeatsResult
from src.service.ticketing.domain.entity.event_entity import EventEntity


class EventCreateRequest(BaseModel):
    name: str
    price: int = Field(ge=0)
    category: str = ''
    location: str = ''
    description: str = ''
    # None = unbounded inventory
    seats: Optional[List[str]] = None
    # ISO-8601; values without offset are venue-local time
    event_start: Optional[str] = None
    event_end: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'name': 'Jazz Night',
                'price': 1500,
                'category': 'music',
                'location': 'Patan Durbar Square',
                'description': 'Open air jazz',
                'seats': ['A1', 'A2', 'A3', 'B1', 'B2'],
                'event_start': '2025-07-22T19:00',
                'event_end': '2025-07-22 23:00',
            }
        }
    )


class EventResponse(BaseModel):
    id: int
    name: str
    category: str
    location: str
    description: str
    organizer_id: int
    price: int
    income: int
    seats: Optional[List[str]] = None
    event_start: Optional[datetime] = None
    event_end: Optional[datetime] = None
    is_deleted: bool

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        return cls(
            id=event.id or 0,
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
            is_deleted=event.is_deleted,
        )


class ReservedSeatsResponse(BaseModel):
    event_id: int
    seats: List[str]
    count: int

    @classmethod
    def from_result(cls, result: ReservedSeatsResult) -> 'ReservedSeatsResponse':
        return cls(event_id=result.event_id, seats=result.seats, count=result.count)
