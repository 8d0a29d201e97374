"""
Direct row inserts for integration and API tests.

Users belong to the external auth provider, so tests write them straight into
the table instead of going through an endpoint.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import build_engine, get_session_maker
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus
from src.service.ticketing.driven_adapter.model import (
    EventModel,
    StaffApplicationModel,
    TicketModel,
    UserModel,
)


async def insert_user(session: AsyncSession, *, email: str, role: str, name: str = '') -> int:
    user = UserModel(
        email=email,
        name=name or email.split('@')[0],
        role=role,
        created_at=datetime.now(timezone.utc),
    )
    session.add(user)
    await session.flush()
    return user.id


async def insert_event(
    session: AsyncSession,
    *,
    organizer_id: int,
    name: str = 'Jazz Night',
    price: int = 100,
    seats: Optional[list[str]] = None,
    event_start: Optional[datetime] = None,
    event_end: Optional[datetime] = None,
    income: int = 0,
    is_deleted: bool = False,
) -> int:
    event = EventModel(
        name=name,
        category='music',
        location='Patan',
        description='',
        organizer_id=organizer_id,
        price=price,
        income=income,
        seats=seats,
        event_start=event_start,
        event_end=event_end,
        is_deleted=is_deleted,
        created_at=datetime.now(timezone.utc),
    )
    session.add(event)
    await session.flush()
    return event.id


async def insert_staff_application(
    session: AsyncSession,
    *,
    event_id: int,
    staff_id: int,
    token: str = 'decision-token',
    status: StaffApplicationStatus = StaffApplicationStatus.PENDING,
) -> int:
    application = StaffApplicationModel(
        event_id=event_id,
        staff_id=staff_id,
        token=token,
        status=status.value,
        decided_at=None,
        created_at=datetime.now(timezone.utc),
    )
    session.add(application)
    await session.flush()
    return application.id


async def fetch_event(session: AsyncSession, event_id: int) -> Optional[EventModel]:
    result = await session.execute(
        select(EventModel).where(EventModel.id == event_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def fetch_tickets(session: AsyncSession, event_id: int) -> list[TicketModel]:
    result = await session.execute(
        select(TicketModel).where(TicketModel.event_id == event_id).order_by(TicketModel.id)
    )
    return list(result.scalars().all())


async def fetch_staff_application(
    session: AsyncSession, *, event_id: int, staff_id: int
) -> Optional[StaffApplicationModel]:
    result = await session.execute(
        select(StaffApplicationModel)
        .where(
            StaffApplicationModel.event_id == event_id,
            StaffApplicationModel.staff_id == staff_id,
        )
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


class SharedEngineSession:
    """Session on the application's engine for the running loop (integration tests)."""

    async def __aenter__(self) -> AsyncSession:
        self._session = get_session_maker()()
        return await self._session.__aenter__()

    async def __aexit__(self, *exc_info: object) -> None:
        await self._session.__aexit__(*exc_info)


class PrivateEngineSession:
    """Session on a throwaway engine, for seeding from synchronous API tests."""

    async def __aenter__(self) -> AsyncSession:
        self._engine = build_engine(settings.DATABASE_URL_ASYNC)
        self._session = AsyncSession(self._engine, expire_on_commit=False)
        return self._session

    async def __aexit__(self, *exc_info: object) -> None:
        try:
            await self._session.close()
        finally:
            await self._engine.dispose()
