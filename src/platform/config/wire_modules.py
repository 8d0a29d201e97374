"""Modules carrying `Provide[...]` markers, wired by both the production and the test lifespan."""

from types import ModuleType

from src.platform import app_factory
from src.service.ticketing.app.command import (
    apply_as_staff_use_case,
    book_seats_use_case,
    check_in_ticket_use_case,
    create_event_use_case,
    decide_staff_application_use_case,
    delete_event_use_case,
)
from src.service.ticketing.app.query import (
    get_ticket_qr_use_case,
    list_reserved_seats_use_case,
    list_staff_applications_use_case,
    resolve_ticket_code_use_case,
)
from src.service.ticketing.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    book_seats_use_case,
    check_in_ticket_use_case,
    create_event_use_case,
    delete_event_use_case,
    apply_as_staff_use_case,
    decide_staff_application_use_case,
    resolve_ticket_code_use_case,
    get_ticket_qr_use_case,
    list_reserved_seats_use_case,
    list_staff_applications_use_case,
    role_auth,
    app_factory,
]
