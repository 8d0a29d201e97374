from datetime import datetime

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def mark_checked_in(self, *, ticket_id: int, checked_in_at: datetime) -> bool:
        result = await self.session.execute(
            update(TicketModel)
            .where(TicketModel.id == ticket_id, TicketModel.checked_in.is_(False))
            .values(checked_in=True, checked_in_at=checked_in_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def delete_by_event(self, *, event_id: int) -> int:
        result = await self.session.execute(
            delete(TicketModel)
            .where(TicketModel.event_id == event_id)
            .execution_options(synchronize_session=False)
        )
        deleted = result.rowcount  # type: ignore[attr-defined]
        Logger.base.info(f'🗑️ [TICKET] Deleted {deleted} tickets of event {event_id}')
        return deleted
