from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.rule.storage_id import is_storable_id
from src.service.ticketing.domain.rule.timestamp_parser import ensure_utc
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel


def ticket_model_to_entity(ticket_model: TicketModel) -> TicketEntity:
    return TicketEntity(
        id=ticket_model.id,
        event_id=ticket_model.event_id,
        user_id=ticket_model.user_id,
        seat=ticket_model.seat,
        transaction_group_id=ticket_model.transaction_group_id,
        qr_code=ticket_model.qr_code,
        price=ticket_model.price,
        checked_in=ticket_model.checked_in,
        checked_in_at=ensure_utc(ticket_model.checked_in_at) if ticket_model.checked_in_at else None,
        created_at=ensure_utc(ticket_model.created_at) if ticket_model.created_at else None,
    )


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _fetch(self, *conditions) -> list[TicketEntity]:
        # populate_existing: conditional UPDATEs bypass the identity map
        stmt = (
            select(TicketModel)
            .where(*conditions)
            .order_by(TicketModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [ticket_model_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def get_by_id(self, *, ticket_id: int) -> Optional[TicketEntity]:
        if not is_storable_id(ticket_id):
            return None
        tickets = await self._fetch(TicketModel.id == ticket_id)
        return tickets[0] if tickets else None

    @Logger.io
    async def list_by_ids(self, *, ticket_ids: list[int]) -> list[TicketEntity]:
        ticket_ids = [ticket_id for ticket_id in ticket_ids if is_storable_id(ticket_id)]
        if not ticket_ids:
            return []
        return await self._fetch(TicketModel.id.in_(ticket_ids))

    @Logger.io
    async def list_by_qr_code(self, *, qr_code: str) -> list[TicketEntity]:
        return await self._fetch(TicketModel.qr_code == qr_code)

    @Logger.io
    async def list_by_transaction_group(self, *, transaction_group_id: str) -> list[TicketEntity]:
        return await self._fetch(TicketModel.transaction_group_id == transaction_group_id)
