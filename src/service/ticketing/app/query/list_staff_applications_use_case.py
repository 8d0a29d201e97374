from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.staff_application_entity import StaffApplicationEntity
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus


class ListStaffApplicationsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_applications(self, *, staff_id: int) -> list[StaffApplicationEntity]:
        async with self.uow:
            return await self.uow.staff_application_query_repo.list_by_staff(staff_id=staff_id)

    @Logger.io
    async def list_approved_events(self, *, staff_id: int) -> list[EventEntity]:
        """Live events the staff member may work at."""
        async with self.uow:
            approved = await self.uow.staff_application_query_repo.list_by_staff(
                staff_id=staff_id, status=StaffApplicationStatus.APPROVED
            )
            events = await self.uow.event_query_repo.list_by_ids(
                event_ids=[application.event_id for application in approved]
            )
        return [event for event in events if not event.is_deleted]
