"""
Unit of Work Pattern - one database session and its repositories per block

Architecture:
- UoW opens a session on enter and closes it on exit
- UoW owns commit / rollback (anything not committed is rolled back on exit)
- Repositories created on enter share the session
- Use cases coordinate several repositories inside one transaction
- Driver timeouts and lost connections escaping the block become TransientStoreError
"""

from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from types import TracebackType
from typing import TYPE_CHECKING, Callable, Optional

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import TransientStoreError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.ticketing.app.interface.i_event_command_repo import IEventCommandRepo
    from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
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


TRANSIENT_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, TimeoutError)


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for Ticketing Service

    Usage:
        async with uow:
            ticket = await uow.seat_ledger.reserve_seat(ticket=...)
            await uow.commit()
    """

    # Event repositories
    event_command_repo: IEventCommandRepo
    event_query_repo: IEventQueryRepo

    # Ticket repositories
    seat_ledger: ISeatLedger
    ticket_command_repo: ITicketCommandRepo
    ticket_query_repo: ITicketQueryRepo

    # Staff application repositories
    staff_application_command_repo: IStaffApplicationCommandRepo
    staff_application_query_repo: IStaffApplicationQueryRepo

    # Users (read-only, owned by the auth provider)
    user_query_repo: IUserQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Not reentrant: one instance serves one request, blocks run one after another.
    """

    def __init__(
        self, session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]]
    ) -> None:
        self.session_factory = session_factory
        self._session_context: Optional[AbstractAsyncContextManager[AsyncSession]] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.ticketing.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import (
            EventQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.seat_ledger_impl import SeatLedgerImpl
        from src.service.ticketing.driven_adapter.repo.staff_application_command_repo_impl import (
            StaffApplicationCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.staff_application_query_repo_impl import (
            StaffApplicationQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.ticket_command_repo_impl import (
            TicketCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.ticket_query_repo_impl import (
            TicketQueryRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.user_query_repo_impl import (
            UserQueryRepoImpl,
        )

        self._session_context = self.session_factory()
        session = await self._session_context.__aenter__()
        self.session = session

        # Create repositories with shared session
        self.event_command_repo = EventCommandRepoImpl(session=session)
        self.event_query_repo = EventQueryRepoImpl(session=session)
        self.seat_ledger = SeatLedgerImpl(session=session)
        self.ticket_command_repo = TicketCommandRepoImpl(session=session)
        self.ticket_query_repo = TicketQueryRepoImpl(session=session)
        self.staff_application_command_repo = StaffApplicationCommandRepoImpl(session=session)
        self.staff_application_query_repo = StaffApplicationQueryRepoImpl(session=session)
        self.user_query_repo = UserQueryRepoImpl(session=session)

        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        session_context, self._session_context, self.session = self._session_context, None, None
        try:
            if session_context is not None:
                # Closing the session rolls back whatever was not committed
                await session_context.__aexit__(exc_type, exc, tb)
        except TRANSIENT_ERRORS as cleanup_error:
            Logger.base.warning(f'⚠️ [UOW] Session cleanup failed: {cleanup_error}')

        if exc is not None and isinstance(exc, TRANSIENT_ERRORS):
            Logger.base.error(f'🔌 [UOW] Storage unavailable: {type(exc).__name__}: {exc}')
            raise TransientStoreError() from exc

    async def _commit(self) -> None:
        if self.session is None:
            raise RuntimeError('Unit of work used outside of its async with block')
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
