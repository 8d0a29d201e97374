from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.reserved_seats_result import ReservedSeatsResult


class ListReservedSeatsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_reserved(self, *, event_id: int) -> ReservedSeatsResult:
        async with self.uow:
            event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
            if not event:
                raise NotFoundError(f'Event not found: {event_id}')
            seats = await self.uow.seat_ledger.list_reserved_seats(event_id=event_id)

        return ReservedSeatsResult(event_id=event_id, seats=sorted(seats))
