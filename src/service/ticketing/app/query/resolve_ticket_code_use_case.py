from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.ticketing.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.rule.legacy_qr_payload import parse_legacy_ticket_ids
from src.service.ticketing.domain.rule.storage_id import parse_storable_id
from src.service.ticketing.domain.value_object.ticket_resolution import TicketResolution


async def resolve_code(
    *,
    code: Optional[str],
    ticket_query_repo: ITicketQueryRepo,
    event_query_repo: IEventQueryRepo,
) -> TicketResolution:
    """
    Lookup order: ticket id, QR code (group), legacy multi-ticket payload.

    Runs on the repositories of an already entered unit of work.
    """
    code = (code or '').strip()
    if not code:
        return TicketResolution.not_found()

    async def _with_event(tickets: list[TicketEntity], *, legacy: bool = False):
        event = await event_query_repo.get_by_id(event_id=tickets[0].event_id)
        return TicketResolution.of(tickets, event, legacy=legacy)

    ticket_id = parse_storable_id(code)
    if ticket_id is not None:
        ticket = await ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if ticket:
            return await _with_event([ticket])

    tickets = await ticket_query_repo.list_by_qr_code(qr_code=code)
    if tickets:
        return await _with_event(tickets)

    legacy_ids = parse_legacy_ticket_ids(code)
    if legacy_ids:
        tickets = await ticket_query_repo.list_by_ids(ticket_ids=legacy_ids)
        if tickets:
            return await _with_event(tickets, legacy=True)

    return TicketResolution.not_found()


class ResolveTicketCodeUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def resolve(self, *, code: Optional[str]) -> TicketResolution:
        async with self.uow:
            resolution = await resolve_code(
                code=code,
                ticket_query_repo=self.uow.ticket_query_repo,
                event_query_repo=self.uow.event_query_repo,
            )
        metrics.record_resolution(kind=resolution.kind.value, legacy=resolution.legacy)
        return resolution
