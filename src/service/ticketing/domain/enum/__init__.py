"""Ticketing Domain Enums"""

from src.service.ticketing.domain.enum.resolution_kind import ResolutionKind
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus
from src.service.ticketing.domain.enum.staff_decision import StaffDecision
from src.service.ticketing.domain.enum.user_role import UserRole

__all__ = ['ResolutionKind', 'StaffApplicationStatus', 'StaffDecision', 'UserRole']
