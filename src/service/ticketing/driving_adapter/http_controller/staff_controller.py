from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.apply_as_staff_use_case import ApplyAsStaffUseCase
from src.service.ticketing.app.command.decide_staff_application_use_case import (
    DecideStaffApplicationUseCase,
)
from src.service.ticketing.app.query.list_staff_applications_use_case import (
    ListStaffApplicationsUseCase,
)
from src.service.ticketing.domain.value_object.actor_context import ActorContext
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import require_staff
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventResponse,
)
from src.service.ticketing.driving_adapter.http_controller.schema.staff_schema import (
    StaffApplicationResponse,
)


router = APIRouter()


@router.post('/event/{event_id}/apply', status_code=status.HTTP_201_CREATED)
@Logger.io
async def apply_as_staff(
    event_id: int,
    actor: ActorContext = Depends(require_staff),
    use_case: ApplyAsStaffUseCase = Depends(ApplyAsStaffUseCase.depends),
) -> StaffApplicationResponse:
    application = await use_case.apply(event_id=event_id, staff_id=actor.user_id)
    return StaffApplicationResponse.from_entity(application)


@router.get('/event/{event_id}/decision')
@Logger.io
async def decide_staff_application(
    event_id: int,
    staff_id: int = Query(...),
    token: str = Query(...),
    decision: str = Query(...),
    use_case: DecideStaffApplicationUseCase = Depends(DecideStaffApplicationUseCase.depends),
) -> StaffApplicationResponse:
    """Opened from the organizer's email; the token is the only credential."""
    application = await use_case.decide(
        event_id=event_id, staff_id=staff_id, token=token, decision=decision
    )
    return StaffApplicationResponse.from_entity(application)


@router.get('/my_applications')
@Logger.io
async def list_my_applications(
    actor: ActorContext = Depends(require_staff),
    use_case: ListStaffApplicationsUseCase = Depends(ListStaffApplicationsUseCase.depends),
) -> List[StaffApplicationResponse]:
    applications = await use_case.list_applications(staff_id=actor.user_id)
    return [StaffApplicationResponse.from_entity(application) for application in applications]


@router.get('/my_events')
@Logger.io
async def list_my_events(
    actor: ActorContext = Depends(require_staff),
    use_case: ListStaffApplicationsUseCase = Depends(ListStaffApplicationsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_approved_events(staff_id=actor.user_id)
    return [EventResponse.from_entity(event) for event in events]
