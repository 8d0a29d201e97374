from abc import ABC, abstractmethod
from datetime import datetime

from src.service.ticketing.domain.entity.staff_application_entity import StaffApplicationEntity
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus


class IStaffApplicationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, application: StaffApplicationEntity) -> StaffApplicationEntity:
        """
        Raises:
            AlreadyAppliedError: an application for (event, staff) already exists
        """
        pass

    @abstractmethod
    async def decide(
        self,
        *,
        application_id: int,
        status: StaffApplicationStatus,
        decided_at: datetime,
    ) -> bool:
        """Conditional update keyed on `status = PENDING`; False if someone decided first."""
        pass

    @abstractmethod
    async def delete_by_event(self, *, event_id: int) -> int:
        pass
