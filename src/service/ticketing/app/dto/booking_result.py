"""Booking result DTO."""

from typing import Optional

import attrs

from src.service.ticketing.domain.entity.ticket_entity import TicketEntity


@attrs.define(frozen=True)
class BookingResult:
    """
    Outcome of a committed booking.

    notification_warning is set when the confirmation email could not be sent;
    the booking itself stands regardless.
    """

    tickets: list[TicketEntity]
    transaction_group_id: str
    qr_image: bytes = attrs.field(repr=lambda image: f'<{len(image)} bytes>')
    total_price: int
    notification_warning: Optional[str] = None
