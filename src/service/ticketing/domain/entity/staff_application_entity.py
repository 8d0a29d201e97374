from datetime import datetime, timezone
from typing import Optional

import attrs

from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus


@attrs.define
class StaffApplicationEntity:
    event_id: int
    staff_id: int
    token: str = attrs.field(repr=False)  # one-time link secret
    status: StaffApplicationStatus = StaffApplicationStatus.PENDING
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, event_id: int, staff_id: int, token: str) -> 'StaffApplicationEntity':
        return cls(
            event_id=event_id,
            staff_id=staff_id,
            token=token,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_pending(self) -> bool:
        return self.status is StaffApplicationStatus.PENDING
