from enum import StrEnum

from src.platform.exception.exceptions import InvalidInputError
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus


class StaffDecision(StrEnum):
    APPROVE = 'approve'
    REJECT = 'reject'

    @classmethod
    def parse(cls, raw: str) -> 'StaffDecision':
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise InvalidInputError(f'Decision must be approve or reject, got: {raw}') from None

    @property
    def resulting_status(self) -> StaffApplicationStatus:
        if self is StaffDecision.APPROVE:
            return StaffApplicationStatus.APPROVED
        return StaffApplicationStatus.REJECTED
