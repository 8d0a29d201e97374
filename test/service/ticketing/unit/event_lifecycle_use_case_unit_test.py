from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.service.ticketing.app.command.create_event_use_case import CreateEventUseCase
from src.service.ticketing.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.ticketing.app.command.sweep_expired_events_use_case import (
    SweepExpiredEventsUseCase,
)
from src.service.ticketing.app.query.list_reserved_seats_use_case import ListReservedSeatsUseCase
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.value_object.actor_context import ActorContext
from test.support.fake_unit_of_work import FakeUnitOfWork


NOW = datetime(2025, 7, 22, 12, 0, tzinfo=timezone.utc)
ORGANIZER = ActorContext(user_id=9, role='ORGANIZER')


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


def _event(**overrides) -> EventEntity:
    fields = {
        'id': 1,
        'name': 'Jazz Night',
        'organizer_id': 9,
        'price': 100,
        'event_start': NOW - timedelta(hours=5),
        'event_end': NOW - timedelta(hours=2),
    }
    fields.update(overrides)
    return EventEntity(**fields)


@pytest.mark.unit
class TestCreateEvent:
    async def test_timestamps_are_stored_in_utc(self, uow: FakeUnitOfWork) -> None:
        # Given
        async def _create(*, event: EventEntity) -> EventEntity:
            event.id = 1
            return event

        uow.event_command_repo.create.side_effect = _create
        use_case = CreateEventUseCase(uow=uow)

        # When
        event = await use_case.create(
            actor=ORGANIZER,
            name='Jazz Night',
            price=1500,
            seats=['A1', 'A2'],
            event_start='2025-07-22T19:00',
            event_end='2025-07-22T23:00:00Z',
        )

        # Then: naive start is venue time (Asia/Kathmandu, +05:45)
        assert event.organizer_id == 9
        assert event.event_start == datetime(2025, 7, 22, 13, 15, tzinfo=timezone.utc)
        assert event.event_end == datetime(2025, 7, 22, 23, 0, tzinfo=timezone.utc)
        assert uow.committed == 1

    async def test_customer_cannot_create(self, uow: FakeUnitOfWork) -> None:
        use_case = CreateEventUseCase(uow=uow)

        with pytest.raises(ForbiddenError):
            await use_case.create(actor=ActorContext(5, 'CUSTOMER'), name='Gig', price=1)

        uow.event_command_repo.create.assert_not_awaited()


@pytest.mark.unit
class TestDeleteEvent:
    async def test_unsold_event_is_removed(self, uow: FakeUnitOfWork) -> None:
        uow.event_query_repo.get_by_id.return_value = _event(event_end=NOW + timedelta(days=3))
        uow.seat_ledger.count_reserved.return_value = 0

        await DeleteEventUseCase(uow=uow).delete(event_id=1, actor=ORGANIZER, now=NOW)

        uow.staff_application_command_repo.delete_by_event.assert_awaited_once_with(event_id=1)
        uow.event_command_repo.hard_delete.assert_awaited_once_with(event_id=1)
        uow.event_command_repo.soft_delete.assert_not_awaited()
        assert uow.committed == 1

    async def test_ended_event_with_sales_is_soft_deleted(self, uow: FakeUnitOfWork) -> None:
        uow.event_query_repo.get_by_id.return_value = _event(income=300)
        uow.seat_ledger.count_reserved.return_value = 3

        await DeleteEventUseCase(uow=uow).delete(event_id=1, actor=ORGANIZER, now=NOW)

        uow.ticket_command_repo.delete_by_event.assert_awaited_once_with(event_id=1)
        uow.event_command_repo.soft_delete.assert_awaited_once_with(event_id=1)
        uow.event_command_repo.hard_delete.assert_not_awaited()

    async def test_upcoming_event_with_sales_is_refused(self, uow: FakeUnitOfWork) -> None:
        uow.event_query_repo.get_by_id.return_value = _event(event_end=NOW + timedelta(days=3))
        uow.seat_ledger.count_reserved.return_value = 1

        with pytest.raises(ConflictError):
            await DeleteEventUseCase(uow=uow).delete(event_id=1, actor=ORGANIZER, now=NOW)

        assert uow.committed == 0

    async def test_other_organizer_is_forbidden(self, uow: FakeUnitOfWork) -> None:
        uow.event_query_repo.get_by_id.return_value = _event()

        with pytest.raises(ForbiddenError):
            await DeleteEventUseCase(uow=uow).delete(
                event_id=1, actor=ActorContext(8, 'ORGANIZER'), now=NOW
            )

    @pytest.mark.parametrize('deleted', [True, False])
    async def test_missing_event(self, uow: FakeUnitOfWork, deleted: bool) -> None:
        uow.event_query_repo.get_by_id.return_value = _event(is_deleted=True) if deleted else None

        with pytest.raises(NotFoundError):
            await DeleteEventUseCase(uow=uow).delete(event_id=1, actor=ORGANIZER, now=NOW)


@pytest.mark.unit
class TestSweepExpiredEvents:
    async def test_cutoff_is_now_minus_grace(self, uow: FakeUnitOfWork) -> None:
        uow.event_command_repo.soft_delete_ended_before.return_value = [4, 7]
        use_case = SweepExpiredEventsUseCase(uow=uow, grace=timedelta(days=1))

        swept = await use_case.sweep(now=NOW)

        assert swept == [4, 7]
        uow.event_command_repo.soft_delete_ended_before.assert_awaited_once_with(
            cutoff=NOW - timedelta(days=1)
        )
        assert uow.committed == 1

    async def test_naive_now_is_treated_as_utc(self, uow: FakeUnitOfWork) -> None:
        uow.event_command_repo.soft_delete_ended_before.return_value = []
        use_case = SweepExpiredEventsUseCase(uow=uow, grace=timedelta(hours=6))

        await use_case.sweep(now=datetime(2025, 7, 22, 12, 0))

        cutoff = uow.event_command_repo.soft_delete_ended_before.await_args.kwargs['cutoff']
        assert cutoff == datetime(2025, 7, 22, 6, 0, tzinfo=timezone.utc)


@pytest.mark.unit
class TestListReservedSeats:
    async def test_seats_are_sorted(self, uow: FakeUnitOfWork) -> None:
        uow.event_query_repo.get_by_id.return_value = _event()
        uow.seat_ledger.list_reserved_seats.return_value = {'B1', 'A2', 'A1'}

        result = await ListReservedSeatsUseCase(uow=uow).list_reserved(event_id=1)

        assert result.seats == ['A1', 'A2', 'B1']
        assert result.count == 3

    async def test_unknown_event(self, uow: FakeUnitOfWork) -> None:
        uow.event_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await ListReservedSeatsUseCase(uow=uow).list_reserved(event_id=404)
