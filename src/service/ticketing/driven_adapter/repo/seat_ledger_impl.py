"""
Seat Ledger Implementation (SQLAlchemy)

Each seat is flushed on its own so the first UNIQUE(event_id, seat) violation
names the seat that lost. The caller's unit of work rolls the whole batch back.
"""

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import SeatConflictError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_seat_ledger import ISeatLedger
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.driven_adapter.model.ticket_model import (
    SEAT_UNIQUE_CONSTRAINT,
    TicketModel,
)
from src.service.ticketing.driven_adapter.repo.ticket_query_repo_impl import ticket_model_to_entity


def is_seat_conflict(error: IntegrityError) -> bool:
    message = str(error.orig if error.orig is not None else error)
    # PostgreSQL names the constraint, SQLite names the columns
    return SEAT_UNIQUE_CONSTRAINT in message or 'ticket.event_id, ticket.seat' in message


class SeatLedgerImpl(ISeatLedger):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def reserve_seat(self, *, ticket: TicketEntity) -> TicketEntity:
        ticket_model = TicketModel(
            event_id=ticket.event_id,
            user_id=ticket.user_id,
            seat=ticket.seat,
            transaction_group_id=ticket.transaction_group_id,
            qr_code=ticket.qr_code,
            price=ticket.price,
            checked_in=False,
            checked_in_at=None,
            created_at=ticket.created_at or datetime.now(timezone.utc),
        )
        self.session.add(ticket_model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if is_seat_conflict(e):
                raise SeatConflictError(ticket.seat) from e
            raise

        return ticket_model_to_entity(ticket_model)

    @Logger.io
    async def count_reserved(self, *, event_id: int) -> int:
        result = await self.session.execute(
            select(func.count(TicketModel.id)).where(TicketModel.event_id == event_id)
        )
        return result.scalar_one()

    @Logger.io
    async def list_reserved_seats(self, *, event_id: int) -> set[str]:
        result = await self.session.execute(
            select(TicketModel.seat).where(TicketModel.event_id == event_id)
        )
        return set(result.scalars().all())
