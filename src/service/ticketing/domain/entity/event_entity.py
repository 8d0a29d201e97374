from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import InvalidInputError


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise InvalidInputError(f'Event {attribute.name} cannot be empty')


def _validate_non_negative(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise InvalidInputError(f'Event {attribute.name} cannot be negative')


def normalize_seat_labels(seats: Optional[Iterable[str]]) -> Optional[list[str]]:
    """Strip labels; reject blanks and duplicates. None keeps the inventory unbounded."""
    if seats is None:
        return None
    labels = [seat.strip() for seat in seats]
    if any(not label for label in labels):
        raise InvalidInputError('Seat labels cannot be empty')
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise InvalidInputError(f'Duplicate seat labels: {", ".join(duplicates)}')
    return labels


@attrs.define
class EventEntity:
    name: str = attrs.field(validator=_validate_non_empty_string)
    organizer_id: int
    price: int = attrs.field(default=0, validator=_validate_non_negative)
    category: str = ''
    location: str = ''
    description: str = ''
    seats: Optional[list[str]] = None
    event_start: Optional[datetime] = None
    event_end: Optional[datetime] = None
    income: int = attrs.field(default=0, validator=_validate_non_negative)
    is_deleted: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        name: str,
        organizer_id: int,
        price: int,
        category: str = '',
        location: str = '',
        description: str = '',
        seats: Optional[Iterable[str]] = None,
        event_start: Optional[datetime] = None,
        event_end: Optional[datetime] = None,
    ) -> 'EventEntity':
        if event_start and event_end and event_end < event_start:
            raise InvalidInputError('Event end cannot be before event start')

        return cls(
            name=name.strip(),
            organizer_id=organizer_id,
            price=price,
            category=category,
            location=location,
            description=description,
            seats=normalize_seat_labels(seats),
            event_start=event_start,
            event_end=event_end,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_bookable(self) -> bool:
        return not self.is_deleted

    def has_ended(self, now: datetime) -> bool:
        return self.event_end is not None and self.event_end < now

    def is_expired(self, now: datetime, *, grace: timedelta) -> bool:
        return self.has_ended(now - grace)

    def validate_seats_in_inventory(self, seats: Iterable[str]) -> None:
        if self.seats is None:
            return
        inventory = set(self.seats)
        for seat in seats:
            if seat not in inventory:
                raise InvalidInputError(f'Seat {seat} does not exist for event {self.id}')
