from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.entity.event_entity import EventEntity


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        """Returns soft-deleted events too; callers decide what deletion means to them."""
        pass

    @abstractmethod
    async def list_by_ids(self, *, event_ids: list[int]) -> list[EventEntity]:
        pass
