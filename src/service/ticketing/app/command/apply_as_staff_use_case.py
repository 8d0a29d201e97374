import secrets
from typing import Self
from urllib.parse import urlencode

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    AlreadyAppliedError,
    ForbiddenError,
    InvalidReferenceError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.app.interface.i_notification_service import INotificationService
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.staff_application_entity import StaffApplicationEntity
from src.service.ticketing.domain.entity.user_entity import UserEntity
from src.service.ticketing.domain.enum.staff_decision import StaffDecision
from src.service.ticketing.domain.enum.user_role import UserRole


def build_decision_link(
    *, event_id: int, staff_id: int, token: str, decision: StaffDecision
) -> str:
    query = urlencode({'staff_id': staff_id, 'token': token, 'decision': decision.value})
    return f'{settings.STAFF_DECISION_BASE_URL}/event/{event_id}/decision?{query}'


class ApplyAsStaffUseCase:
    def __init__(
        self, *, uow: AbstractUnitOfWork, notification_service: INotificationService
    ) -> None:
        self.uow = uow
        self.notification_service = notification_service

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        notification_service: INotificationService = Depends(
            Provide[Container.notification_service]
        ),
    ) -> Self:
        return cls(uow=uow, notification_service=notification_service)

    @Logger.io
    async def apply(self, *, event_id: int, staff_id: int) -> StaffApplicationEntity:
        async with self.uow:
            staff = await self.uow.user_query_repo.get_by_id(staff_id)
            if not staff:
                raise InvalidReferenceError(f'User not found: {staff_id}')
            if staff.role is not UserRole.STAFF:
                raise ForbiddenError('Only staff accounts can apply for events')

            event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
            if not event or event.is_deleted:
                raise InvalidReferenceError(f'Event not found: {event_id}')

            existing = await self.uow.staff_application_query_repo.get_by_event_and_staff(
                event_id=event_id, staff_id=staff_id
            )
            if existing:
                raise AlreadyAppliedError(
                    f'Staff {staff_id} already applied for event {event_id}'
                )

            # UNIQUE(event_id, staff_id) settles concurrent applications
            application = await self.uow.staff_application_command_repo.create(
                application=StaffApplicationEntity.create(
                    event_id=event_id, staff_id=staff_id, token=secrets.token_urlsafe(32)
                )
            )
            organizer = await self.uow.user_query_repo.get_by_id(event.organizer_id)
            await self.uow.commit()

        if organizer:
            await self._notify_organizer(
                organizer=organizer, staff=staff, event=event, application=application
            )
        return application

    async def _notify_organizer(
        self,
        *,
        organizer: UserEntity,
        staff: UserEntity,
        event: EventEntity,
        application: StaffApplicationEntity,
    ) -> None:
        links = {
            decision: build_decision_link(
                event_id=application.event_id,
                staff_id=application.staff_id,
                token=application.token,
                decision=decision,
            )
            for decision in StaffDecision
        }
        body = '\n'.join(
            [
                f'Hello {organizer.name},',
                '',
                f'{staff.name} ({staff.email}) applied to work as staff at {event.name}.',
                '',
                f'Approve: {links[StaffDecision.APPROVE]}',
                f'Reject: {links[StaffDecision.REJECT]}',
            ]
        )
        try:
            await self.notification_service.send_plain_email(
                to_address=organizer.email,
                subject=f'Staff application for {event.name}',
                body_text=body,
            )
        except Exception as e:
            metrics.record_notification_failure(kind='staff_application')
            Logger.base.warning(
                f'📭 [STAFF] Application {application.id} stored but organizer email failed: {e}'
            )
