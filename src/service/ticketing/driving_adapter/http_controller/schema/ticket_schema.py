import base64
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.ticketing.app.dto.booking_result import BookingResult
from src.service.ticketing.app.dto.check_in_result import CheckInResult
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.value_object.ticket_resolution import TicketResolution
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventResponse,
)


class BookSeatsRequest(BaseModel):
    event_id: int
    seats: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={'example': {'event_id': 1, 'seats': ['A1', 'A2']}}
    )


class CheckInByCodeRequest(BaseModel):
    code: str


class TicketResponse(BaseModel):
    id: int
    event_id: int
    user_id: int
    seat: str
    transaction_group_id: str
    qr_code: str
    price: int
    checked_in: bool
    checked_in_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'TicketResponse':
        return cls(
            id=ticket.id or 0,
            event_id=ticket.event_id,
            user_id=ticket.user_id,
            seat=ticket.seat,
            transaction_group_id=ticket.transaction_group_id,
            qr_code=ticket.qr_code,
            price=ticket.price,
            checked_in=ticket.checked_in,
            checked_in_at=ticket.checked_in_at,
            created_at=ticket.created_at,
        )


class BookingResponse(BaseModel):
    transaction_group_id: str
    tickets: List[TicketResponse]
    total_price: int
    qr_image_base64: str
    notification_warning: Optional[str] = None

    @classmethod
    def from_result(cls, result: BookingResult) -> 'BookingResponse':
        return cls(
            transaction_group_id=result.transaction_group_id,
            tickets=[TicketResponse.from_entity(ticket) for ticket in result.tickets],
            total_price=result.total_price,
            qr_image_base64=base64.b64encode(result.qr_image).decode('ascii'),
            notification_warning=result.notification_warning,
        )


class TicketResolutionResponse(BaseModel):
    kind: str
    legacy: bool
    tickets: List[TicketResponse]
    event: Optional[EventResponse] = None

    @classmethod
    def from_resolution(cls, resolution: TicketResolution) -> 'TicketResolutionResponse':
        return cls(
            kind=resolution.kind.value,
            legacy=resolution.legacy,
            tickets=[TicketResponse.from_entity(ticket) for ticket in resolution.tickets],
            event=EventResponse.from_entity(resolution.event) if resolution.event else None,
        )


class CheckInResponse(BaseModel):
    ticket: TicketResponse
    already_checked_in: bool
    message: str

    @classmethod
    def from_result(cls, result: CheckInResult) -> 'CheckInResponse':
        return cls(
            ticket=TicketResponse.from_entity(result.ticket),
            already_checked_in=result.already_checked_in,
            message='Ticket already checked in'
            if result.already_checked_in
            else 'Ticket checked in',
        )
