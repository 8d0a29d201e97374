from typing import Optional

import attrs

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.resolution_kind import ResolutionKind


@attrs.frozen
class TicketResolution:
    kind: ResolutionKind
    tickets: list[TicketEntity] = attrs.field(factory=list)
    event: Optional[EventEntity] = None
    legacy: bool = False

    @classmethod
    def not_found(cls) -> 'TicketResolution':
        return cls(kind=ResolutionKind.NOT_FOUND)

    @classmethod
    def of(
        cls,
        tickets: list[TicketEntity],
        event: Optional[EventEntity],
        *,
        legacy: bool = False,
    ) -> 'TicketResolution':
        if not tickets:
            return cls.not_found()
        ordered = sorted(tickets, key=lambda t: t.id or 0)
        kind = ResolutionKind.SINGLE if len(ordered) == 1 and not legacy else ResolutionKind.GROUP
        return cls(kind=kind, tickets=ordered, event=event, legacy=legacy)
