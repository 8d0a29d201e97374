from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.book_seats_use_case import BookSeatsUseCase
from src.service.ticketing.app.command.check_in_ticket_use_case import CheckInTicketUseCase
from src.service.ticketing.app.query.get_ticket_qr_use_case import GetTicketQrUseCase
from src.service.ticketing.app.query.resolve_ticket_code_use_case import (
    ResolveTicketCodeUseCase,
)
from src.service.ticketing.domain.enum.resolution_kind import ResolutionKind
from src.service.ticketing.domain.value_object.actor_context import ActorContext
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_actor,
    require_customer,
    require_scanner,
)
from src.service.ticketing.driving_adapter.http_controller.schema.ticket_schema import (
    BookingResponse,
    BookSeatsRequest,
    CheckInByCodeRequest,
    CheckInResponse,
    TicketResolutionResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)

PNG_MEDIA_TYPE = 'image/png'


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def book_seats(
    request: BookSeatsRequest,
    actor: ActorContext = Depends(require_customer),
    use_case: BookSeatsUseCase = Depends(BookSeatsUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.book_seats') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('user_id', actor.user_id)
        span.set_attribute('seat_count', len(request.seats))

        # Customers always book for themselves
        result = await use_case.book_seats(
            user_id=actor.user_id, event_id=request.event_id, seats=request.seats
        )
        span.set_attribute('transaction_group_id', result.transaction_group_id)
        return BookingResponse.from_result(result)


@router.get('/resolve')
@Logger.io
async def resolve_ticket_code(
    code: str = Query(default=''),
    actor: ActorContext = Depends(require_scanner),
    use_case: ResolveTicketCodeUseCase = Depends(ResolveTicketCodeUseCase.depends),
) -> TicketResolutionResponse:
    resolution = await use_case.resolve(code=code)
    if resolution.kind is ResolutionKind.NOT_FOUND:
        raise NotFoundError('Ticket not found')
    return TicketResolutionResponse.from_resolution(resolution)


@router.post('/check_in')
@Logger.io
async def check_in_by_code(
    request: CheckInByCodeRequest,
    actor: ActorContext = Depends(require_scanner),
    use_case: CheckInTicketUseCase = Depends(CheckInTicketUseCase.depends),
) -> List[CheckInResponse]:
    results = await use_case.check_in_group(code=request.code, actor=actor)
    return [CheckInResponse.from_result(result) for result in results]


@router.post('/{ticket_id}/check_in')
@Logger.io
async def check_in_ticket(
    ticket_id: int,
    actor: ActorContext = Depends(require_scanner),
    use_case: CheckInTicketUseCase = Depends(CheckInTicketUseCase.depends),
) -> CheckInResponse:
    result = await use_case.check_in(ticket_id=ticket_id, actor=actor)
    return CheckInResponse.from_result(result)


@router.get('/group/{group_id}/qr', response_class=Response)
@Logger.io(truncate_content=True)
async def get_group_qr(
    group_id: str,
    width: Optional[int] = Query(default=None, gt=0, le=settings.QR_IMAGE_MAX_SIZE),
    height: Optional[int] = Query(default=None, gt=0, le=settings.QR_IMAGE_MAX_SIZE),
    actor: ActorContext = Depends(get_current_actor),
    use_case: GetTicketQrUseCase = Depends(GetTicketQrUseCase.depends),
) -> Response:
    image = await use_case.render_group(
        transaction_group_id=group_id, actor=actor, width=width, height=height
    )
    return Response(content=image, media_type=PNG_MEDIA_TYPE)


@router.get('/{ticket_id}/qr', response_class=Response)
@Logger.io(truncate_content=True)
async def get_ticket_qr(
    ticket_id: int,
    width: Optional[int] = Query(default=None, gt=0, le=settings.QR_IMAGE_MAX_SIZE),
    height: Optional[int] = Query(default=None, gt=0, le=settings.QR_IMAGE_MAX_SIZE),
    actor: ActorContext = Depends(get_current_actor),
    use_case: GetTicketQrUseCase = Depends(GetTicketQrUseCase.depends),
) -> Response:
    image = await use_case.render(ticket_id=ticket_id, actor=actor, width=width, height=height)
    return Response(content=image, media_type=PNG_MEDIA_TYPE)
