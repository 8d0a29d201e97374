import secrets
from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InvalidTokenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.domain.entity.staff_application_entity import StaffApplicationEntity
from src.service.ticketing.domain.enum.staff_decision import StaffDecision


class DecideStaffApplicationUseCase:
    """
    Token-link approval. The first decision sticks; clicking either link again
    returns the stored application unchanged.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def decide(
        self, *, event_id: int, staff_id: int, token: str, decision: str
    ) -> StaffApplicationEntity:
        staff_decision = StaffDecision.parse(decision)

        async with self.uow:
            application = await self.uow.staff_application_query_repo.get_by_event_and_staff(
                event_id=event_id, staff_id=staff_id
            )
            if not application:
                raise NotFoundError('Staff application not found')

            if not secrets.compare_digest(application.token.encode(), (token or '').encode()):
                raise InvalidTokenError('Invalid or expired decision link')

            if not application.is_pending:
                return application

            assert application.id is not None
            updated = await self.uow.staff_application_command_repo.decide(
                application_id=application.id,
                status=staff_decision.resulting_status,
                decided_at=datetime.now(timezone.utc),
            )
            await self.uow.commit()

            stored = await self.uow.staff_application_query_repo.get_by_event_and_staff(
                event_id=event_id, staff_id=staff_id
            )

        if updated:
            metrics.record_staff_decision(status=staff_decision.resulting_status.value)
            Logger.base.info(
                f'🧑‍💼 [STAFF] Application of staff {staff_id} for event {event_id} '
                f'{staff_decision.resulting_status.value}'
            )
        return stored or application
