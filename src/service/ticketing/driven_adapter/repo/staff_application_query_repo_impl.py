from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_staff_application_query_repo import (
    IStaffApplicationQueryRepo,
)
from src.service.ticketing.domain.entity.staff_application_entity import StaffApplicationEntity
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus
from src.service.ticketing.domain.rule.storage_id import is_storable_id
from src.service.ticketing.domain.rule.timestamp_parser import ensure_utc
from src.service.ticketing.driven_adapter.model.staff_application_model import (
    StaffApplicationModel,
)


def staff_application_model_to_entity(model: StaffApplicationModel) -> StaffApplicationEntity:
    return StaffApplicationEntity(
        id=model.id,
        event_id=model.event_id,
        staff_id=model.staff_id,
        token=model.token,
        status=StaffApplicationStatus(model.status),
        created_at=ensure_utc(model.created_at) if model.created_at else None,
        decided_at=ensure_utc(model.decided_at) if model.decided_at else None,
    )


class StaffApplicationQueryRepoImpl(IStaffApplicationQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_event_and_staff(
        self, *, event_id: int, staff_id: int
    ) -> Optional[StaffApplicationEntity]:
        if not (is_storable_id(event_id) and is_storable_id(staff_id)):
            return None
        result = await self.session.execute(
            select(StaffApplicationModel)
            .where(
                StaffApplicationModel.event_id == event_id,
                StaffApplicationModel.staff_id == staff_id,
            )
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return staff_application_model_to_entity(model)

    @Logger.io
    async def list_by_staff(
        self, *, staff_id: int, status: Optional[StaffApplicationStatus] = None
    ) -> list[StaffApplicationEntity]:
        if not is_storable_id(staff_id):
            return []
        stmt = select(StaffApplicationModel).where(StaffApplicationModel.staff_id == staff_id)
        if status is not None:
            stmt = stmt.where(StaffApplicationModel.status == status.value)
        result = await self.session.execute(
            stmt.order_by(StaffApplicationModel.id).execution_options(populate_existing=True)
        )
        return [staff_application_model_to_entity(model) for model in result.scalars().all()]
