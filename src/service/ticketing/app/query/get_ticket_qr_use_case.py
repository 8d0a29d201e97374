from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_qr_code_generator import IQrCodeGenerator
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.actor_context import ActorContext


class GetTicketQrUseCase:
    """Re-render the QR code of a ticket or a whole booking (ticket holder or admin)."""

    def __init__(self, *, uow: AbstractUnitOfWork, qr_code_generator: IQrCodeGenerator) -> None:
        self.uow = uow
        self.qr_code_generator = qr_code_generator

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        qr_code_generator: IQrCodeGenerator = Depends(Provide[Container.qr_code_generator]),
    ) -> Self:
        return cls(uow=uow, qr_code_generator=qr_code_generator)

    @Logger.io(truncate_content=True)
    async def render(
        self,
        *,
        ticket_id: int,
        actor: ActorContext,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> bytes:
        async with self.uow:
            ticket = await self.uow.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError(f'Ticket not found: {ticket_id}')
        self._ensure_holder(actor=actor, tickets=[ticket])

        return self.qr_code_generator.encode(
            payload=ticket.qr_code,
            width=width or settings.QR_IMAGE_WIDTH,
            height=height or settings.QR_IMAGE_HEIGHT,
        )

    @Logger.io(truncate_content=True)
    async def render_group(
        self,
        *,
        transaction_group_id: str,
        actor: ActorContext,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> bytes:
        async with self.uow:
            tickets = await self.uow.ticket_query_repo.list_by_transaction_group(
                transaction_group_id=transaction_group_id
            )
        if not tickets:
            raise NotFoundError(f'Booking not found: {transaction_group_id}')
        self._ensure_holder(actor=actor, tickets=tickets)

        return self.qr_code_generator.encode_group(
            transaction_group_id=transaction_group_id,
            width=width or settings.QR_IMAGE_WIDTH,
            height=height or settings.QR_IMAGE_HEIGHT,
        )

    @staticmethod
    def _ensure_holder(*, actor: ActorContext, tickets: list[TicketEntity]) -> None:
        if actor.role is UserRole.ADMIN:
            return
        if any(ticket.user_id != actor.user_id for ticket in tickets):
            raise ForbiddenError('Not authorized to view this ticket')
