from datetime import datetime, timezone

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import AlreadyAppliedError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_staff_application_command_repo import (
    IStaffApplicationCommandRepo,
)
from src.service.ticketing.domain.entity.staff_application_entity import StaffApplicationEntity
from src.service.ticketing.domain.enum.staff_application_status import StaffApplicationStatus
from src.service.ticketing.driven_adapter.model.staff_application_model import (
    StaffApplicationModel,
)
from src.service.ticketing.driven_adapter.repo.staff_application_query_repo_impl import (
    staff_application_model_to_entity,
)


class StaffApplicationCommandRepoImpl(IStaffApplicationCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, application: StaffApplicationEntity) -> StaffApplicationEntity:
        model = StaffApplicationModel(
            event_id=application.event_id,
            staff_id=application.staff_id,
            status=application.status.value,
            token=application.token,
            decided_at=None,
            created_at=application.created_at or datetime.now(timezone.utc),
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise AlreadyAppliedError(
                f'Staff {application.staff_id} already applied for event {application.event_id}'
            ) from e
        return staff_application_model_to_entity(model)

    @Logger.io
    async def decide(
        self,
        *,
        application_id: int,
        status: StaffApplicationStatus,
        decided_at: datetime,
    ) -> bool:
        result = await self.session.execute(
            update(StaffApplicationModel)
            .where(
                StaffApplicationModel.id == application_id,
                StaffApplicationModel.status == StaffApplicationStatus.PENDING.value,
            )
            .values(status=status.value, decided_at=decided_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def delete_by_event(self, *, event_id: int) -> int:
        result = await self.session.execute(
            delete(StaffApplicationModel)
            .where(StaffApplicationModel.event_id == event_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount  # type: ignore[attr-defined]
