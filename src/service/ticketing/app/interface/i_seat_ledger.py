"""
Seat Ledger Interface

The durable record of which (event, seat) pairs are taken. The storage layer's
uniqueness constraint is the only arbiter: there is no "is it free?" pre-check,
so two concurrent bookings can never both win the same seat.
"""

from abc import ABC, abstractmethod

from src.service.ticketing.domain.entity.ticket_entity import TicketEntity


class ISeatLedger(ABC):
    @abstractmethod
    async def reserve_seat(self, *, ticket: TicketEntity) -> TicketEntity:
        """
        Insert the ticket row inside the caller's transaction.

        Returns:
            The ticket with its id assigned

        Raises:
            SeatConflictError: the seat is already taken for this event
        """
        pass

    @abstractmethod
    async def count_reserved(self, *, event_id: int) -> int:
        pass

    @abstractmethod
    async def list_reserved_seats(self, *, event_id: int) -> set[str]:
        pass
