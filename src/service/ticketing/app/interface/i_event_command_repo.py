from abc import ABC, abstractmethod
from datetime import datetime

from src.service.ticketing.domain.entity.event_entity import EventEntity


class IEventCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, event: EventEntity) -> EventEntity:
        pass

    @abstractmethod
    async def increment_income(self, *, event_id: int, delta: int) -> None:
        """Single-statement `income = income + delta`, never read-modify-write."""
        pass

    @abstractmethod
    async def soft_delete(self, *, event_id: int) -> None:
        pass

    @abstractmethod
    async def hard_delete(self, *, event_id: int) -> None:
        pass

    @abstractmethod
    async def soft_delete_ended_before(self, *, cutoff: datetime) -> list[int]:
        """Flag every live event whose end precedes `cutoff`; returns the affected ids."""
        pass
