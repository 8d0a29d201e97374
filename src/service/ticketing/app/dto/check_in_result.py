import attrs

from src.service.ticketing.domain.entity.ticket_entity import TicketEntity


@attrs.define(frozen=True)
class CheckInResult:
    ticket: TicketEntity
    already_checked_in: bool = False
