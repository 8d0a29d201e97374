"""Application layer DTOs"""

from src.service.ticketing.app.dto.booking_result import BookingResult
from src.service.ticketing.app.dto.check_in_result import CheckInResult
from src.service.ticketing.app.dto.reserved_seats_result import ReservedSeatsResult

__all__ = [
    'BookingResult',
    'CheckInResult',
    'ReservedSeatsResult',
]
