from types import TracebackType
from typing import Optional
from unittest.mock import AsyncMock

from src.platform.database.unit_of_work import AbstractUnitOfWork


class FakeUnitOfWork(AbstractUnitOfWork):
    """Unit of work whose repositories are AsyncMocks; records commits and rollbacks."""

    def __init__(self) -> None:
        self.event_command_repo = AsyncMock()
        self.event_query_repo = AsyncMock()
        self.seat_ledger = AsyncMock()
        self.ticket_command_repo = AsyncMock()
        self.ticket_query_repo = AsyncMock()
        self.staff_application_command_repo = AsyncMock()
        self.staff_application_query_repo = AsyncMock()
        self.user_query_repo = AsyncMock()
        self.committed = 0
        self.rolled_back = 0
        self.entered = 0

    async def __aenter__(self) -> 'FakeUnitOfWork':
        self.entered += 1
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.rollback()

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1
