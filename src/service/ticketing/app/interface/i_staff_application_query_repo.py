from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.entity.staff_application_entity import StaffApplicationEntity
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus


class IStaffApplicationQueryRepo(ABC):
    @abstractmethod
    async def get_by_event_and_staff(
        self, *, event_id: int, staff_id: int
    ) -> Optional[StaffApplicationEntity]:
        pass

    @abstractmethod
    async def list_by_staff(
        self, *, staff_id: int, status: Optional[StaffApplicationStatus] = None
    ) -> list[StaffApplicationEntity]:
        pass
