from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.entity.ticket_entity import TicketEntity


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, ticket_id: int) -> Optional[TicketEntity]:
        pass

    @abstractmethod
    async def list_by_ids(self, *, ticket_ids: list[int]) -> list[TicketEntity]:
        pass

    @abstractmethod
    async def list_by_qr_code(self, *, qr_code: str) -> list[TicketEntity]:
        pass

    @abstractmethod
    async def list_by_transaction_group(self, *, transaction_group_id: str) -> list[TicketEntity]:
        pass
