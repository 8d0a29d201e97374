from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.service.ticketing.domain.entity.staff_application_entity import StaffApplicationEntity


class StaffApplicationResponse(BaseModel):
    # the decision token never leaves the server except in the organizer's email
    id: int
    event_id: int
    staff_id: int
    status: str
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, application: StaffApplicationEntity) -> 'StaffApplicationResponse':
        return cls(
            id=application.id or 0,
            event_id=application.event_id,
            staff_id=application.staff_id,
            status=application.status.value,
            created_at=application.created_at,
            decided_at=application.decided_at,
        )
