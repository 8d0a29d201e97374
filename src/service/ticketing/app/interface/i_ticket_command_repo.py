from abc import ABC, abstractmethod
from datetime import datetime


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def mark_checked_in(self, *, ticket_id: int, checked_in_at: datetime) -> bool:
        """
        Conditional update keyed on `checked_in = false`.

        Returns:
            False when the ticket was already checked in (possibly by a concurrent request)
        """
        pass

    @abstractmethod
    async def delete_by_event(self, *, event_id: int) -> int:
        pass
