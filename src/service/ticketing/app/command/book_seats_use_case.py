import time
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    EmptyRequestError,
    InvalidInputError,
    InvalidReferenceError,
    SeatConflictError,
    TransientStoreError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.app.dto.booking_result import BookingResult
from src.service.ticketing.app.interface.i_notification_service import INotificationService
from src.service.ticketing.app.interface.i_qr_code_generator import IQrCodeGenerator
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.entity.user_entity import UserEntity


class BookSeatsUseCase:
    """
    Book a batch of seats all-or-nothing.

    Flow:
    1. Validate the request (non-empty, distinct seats)
    2. In one transaction: check user and event, reserve every seat through the
       ledger, add len(seats) * price to the event income, commit
    3. Render one QR code for the transaction group
    4. Email the tickets (failure is reported, never rolls back)

    The ledger's uniqueness constraint decides seat races; the first conflicting
    seat aborts the batch and nothing of it is persisted.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        qr_code_generator: IQrCodeGenerator,
        notification_service: INotificationService,
    ) -> None:
        self.uow = uow
        self.qr_code_generator = qr_code_generator
        self.notification_service = notification_service
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        qr_code_generator: IQrCodeGenerator = Depends(Provide[Container.qr_code_generator]),
        notification_service: INotificationService = Depends(
            Provide[Container.notification_service]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            qr_code_generator=qr_code_generator,
            notification_service=notification_service,
        )

    @Logger.io
    async def book_seats(self, *, user_id: int, event_id: int, seats: List[str]) -> BookingResult:
        if not seats:
            raise EmptyRequestError('At least one seat must be requested')
        if len(set(seats)) != len(seats):
            raise InvalidInputError('Seats in one booking must be distinct')

        # Step 1: one group id for every ticket of this purchase
        transaction_group_id = str(uuid_utils.uuid7())

        with self.tracer.start_as_current_span(
            'use_case.book_seats',
            attributes={
                'booking.group_id': transaction_group_id,
                'booking.event_id': event_id,
                'booking.seat_count': len(seats),
            },
        ):
            started = time.perf_counter()
            try:
                user, event, tickets = await self._reserve(
                    user_id=user_id,
                    event_id=event_id,
                    seats=seats,
                    transaction_group_id=transaction_group_id,
                )
            except SeatConflictError:
                metrics.record_booking(
                    result='conflict', duration=time.perf_counter() - started, event_id=event_id
                )
                raise
            except TransientStoreError:
                metrics.record_booking(
                    result='unavailable', duration=time.perf_counter() - started, event_id=event_id
                )
                raise
            except (InvalidReferenceError, InvalidInputError):
                metrics.record_booking(
                    result='rejected', duration=time.perf_counter() - started, event_id=event_id
                )
                raise

            total_price = sum(ticket.price for ticket in tickets)
            metrics.record_booking(
                result='success',
                duration=time.perf_counter() - started,
                event_id=event_id,
                seats=len(tickets),
            )
            Logger.base.info(
                f'🎫 [BOOKING] {transaction_group_id}: user {user_id} booked '
                f'{", ".join(seats)} for event {event_id} (total {total_price})'
            )

            # Step 3: one QR code opens the whole group at the door
            qr_image = self.qr_code_generator.encode_group(
                transaction_group_id=transaction_group_id,
                width=settings.QR_IMAGE_WIDTH,
                height=settings.QR_IMAGE_HEIGHT,
            )

            # Step 4: notification is best-effort
            notification_warning = await self._notify(
                user=user,
                event=event,
                tickets=tickets,
                transaction_group_id=transaction_group_id,
                total_price=total_price,
                qr_image=qr_image,
            )

            return BookingResult(
                tickets=tickets,
                transaction_group_id=transaction_group_id,
                qr_image=qr_image,
                total_price=total_price,
                notification_warning=notification_warning,
            )

    async def _reserve(
        self, *, user_id: int, event_id: int, seats: List[str], transaction_group_id: str
    ) -> tuple[UserEntity, EventEntity, list[TicketEntity]]:
        async with self.uow:
            user = await self.uow.user_query_repo.get_by_id(user_id)
            if not user:
                raise InvalidReferenceError(f'User not found: {user_id}')

            event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
            if not event or not event.is_bookable:
                raise InvalidReferenceError(f'Event not found: {event_id}')

            event.validate_seats_in_inventory(seats)

            # Step 2: the ledger is the arbiter, seat by seat, in request order
            tickets: list[TicketEntity] = []
            for seat in seats:
                ticket = TicketEntity.issue(
                    event_id=event_id,
                    user_id=user_id,
                    seat=seat,
                    transaction_group_id=transaction_group_id,
                    price=event.price,
                )
                tickets.append(await self.uow.seat_ledger.reserve_seat(ticket=ticket))

            await self.uow.event_command_repo.increment_income(
                event_id=event_id, delta=event.price * len(tickets)
            )
            await self.uow.commit()

        return user, event, tickets

    async def _notify(
        self,
        *,
        user: UserEntity,
        event: EventEntity,
        tickets: list[TicketEntity],
        transaction_group_id: str,
        total_price: int,
        qr_image: bytes,
    ) -> Optional[str]:
        lines = [
            f'Hello {user.name},',
            '',
            f'Your booking for {event.name} is confirmed.',
            f'Booking reference: {transaction_group_id}',
        ]
        if event.location:
            lines.append(f'Venue: {event.location}')
        if event.event_start:
            lines.append(f'Starts: {event.event_start.isoformat()}')
        lines.append('')
        lines.extend(f'  Seat {ticket.seat} (ticket #{ticket.id}): {ticket.price}' for ticket in tickets)
        lines.extend(['', f'Total: {total_price}', '', 'Show the attached QR code at the entrance.'])

        try:
            await self.notification_service.send_ticket_email(
                to_address=user.email,
                subject=f'Your {settings.PROJECT_NAME} tickets for {event.name}',
                body_text='\n'.join(lines),
                qr_image=qr_image,
                filename=settings.QR_ATTACHMENT_FILENAME,
            )
        except Exception as e:
            metrics.record_notification_failure(kind='ticket')
            Logger.base.warning(
                f'📭 [BOOKING] Tickets of {transaction_group_id} booked but email failed: {e}'
            )
            return f'Booking confirmed but the confirmation email could not be sent: {e}'
        return None
