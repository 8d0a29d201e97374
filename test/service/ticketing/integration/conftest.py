from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.ticketing.app.command.book_seats_use_case import BookSeatsUseCase
from src.service.ticketing.app.command.check_in_ticket_use_case import CheckInTicketUseCase
from src.service.ticketing.driven_adapter.qr.qr_code_generator_impl import QrCodeGeneratorImpl
from test.support.seed import SharedEngineSession, insert_event, insert_user


@pytest.fixture
def notification_service() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def book_seats(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork], notification_service: AsyncMock
) -> Callable[[], BookSeatsUseCase]:
    """A fresh use case per call; a unit of work serves one flow at a time."""

    def _build() -> BookSeatsUseCase:
        return BookSeatsUseCase(
            uow=uow_factory(),
            qr_code_generator=QrCodeGeneratorImpl(),
            notification_service=notification_service,
        )

    return _build


@pytest.fixture
def check_in(uow_factory: Callable[[], SqlAlchemyUnitOfWork]) -> Callable[[], CheckInTicketUseCase]:
    def _build() -> CheckInTicketUseCase:
        return CheckInTicketUseCase(uow=uow_factory())

    return _build


@pytest.fixture
async def users(clean_database: None) -> dict[str, int]:
    # schema must exist before the first insert
    async with SharedEngineSession() as session:
        ids = {
            'admin': await insert_user(session, email='admin@example.com', role='ADMIN'),
            'organizer': await insert_user(session, email='olga@example.com', role='ORGANIZER'),
            'other_organizer': await insert_user(
                session, email='otto@example.com', role='ORGANIZER'
            ),
            'customer': await insert_user(session, email='cora@example.com', role='CUSTOMER'),
            'other_customer': await insert_user(
                session, email='carl@example.com', role='CUSTOMER'
            ),
            # stored with the older role spelling
            'staff': await insert_user(session, email='sam@example.com', role='ROLE_STAFF'),
        }
        await session.commit()
    return ids


@pytest.fixture
async def event_id(users: dict[str, int]) -> int:
    async with SharedEngineSession() as session:
        new_id = await insert_event(
            session, organizer_id=users['organizer'], price=100, seats=['A1', 'A2', 'A3', 'B1']
        )
        await session.commit()
    return new_id
