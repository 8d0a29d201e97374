from fastapi import APIRouter, Depends, Response, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.create_event_use_case import CreateEventUseCase
from src.service.ticketing.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.ticketing.app.query.list_reserved_seats_use_case import (
    ListReservedSeatsUseCase,
)
from src.service.ticketing.domain.value_object.actor_context import ActorContext
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_actor,
    require_organizer,
)
from src.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventCreateRequest,
    EventResponse,
    ReservedSeatsResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    actor: ActorContext = Depends(require_organizer),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create(
        actor=actor,
        name=request.name,
        price=request.price,
        category=request.category,
        location=request.location,
        description=request.description,
        seats=request.seats,
        event_start=request.event_start,
        event_end=request.event_end,
    )
    return EventResponse.from_entity(event)


@router.delete('/{event_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_event(
    event_id: int,
    actor: ActorContext = Depends(require_organizer),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> Response:
    await use_case.delete(event_id=event_id, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get('/{event_id}/reserved_seats')
@Logger.io
async def list_reserved_seats(
    event_id: int,
    actor: ActorContext = Depends(get_current_actor),
    use_case: ListReservedSeatsUseCase = Depends(ListReservedSeatsUseCase.depends),
) -> ReservedSeatsResponse:
    result = await use_case.list_reserved(event_id=event_id)
    return ReservedSeatsResponse.from_result(result)
