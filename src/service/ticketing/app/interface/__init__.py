"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_notification_service import INotificationService
from src.service.ticketing.app.interface.i_qr_code_generator import IQrCodeGenerator
from src.service.ticketing.app.interface.i_seat_ledger import ISeatLedger
from src.service.ticketing.app.interface.i_staff_application_command_repo import (
    IStaffApplicationCommandRepo,
)
from src.service.ticketing.app.interface.i_staff_application_query_repo import (
    IStaffApplicationQueryRepo,
)
from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IEventCommandRepo',
    'IEventQueryRepo',
    'INotificationService',
    'IQrCodeGenerator',
    'ISeatLedger',
    'IStaffApplicationCommandRepo',
    'IStaffApplicationQueryRepo',
    'ITicketCommandRepo',
    'ITicketQueryRepo',
    'IUserQueryRepo',
]
