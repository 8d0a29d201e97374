import pytest

from src.service.ticketing.app.query.resolve_ticket_code_use_case import ResolveTicketCodeUseCase
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.resolution_kind import ResolutionKind
from test.support.fake_unit_of_work import FakeUnitOfWork


def _ticket(ticket_id: int, seat: str, group: str = 'group-1') -> TicketEntity:
    return TicketEntity(
        id=ticket_id,
        event_id=1,
        user_id=5,
        seat=seat,
        transaction_group_id=group,
        qr_code=group,
        price=100,
    )


@pytest.fixture
def uow() -> FakeUnitOfWork:
    uow = FakeUnitOfWork()
    uow.event_query_repo.get_by_id.return_value = EventEntity(
        id=1, name='Jazz Night', organizer_id=9, price=100
    )
    uow.ticket_query_repo.get_by_id.return_value = None
    uow.ticket_query_repo.list_by_qr_code.return_value = []
    uow.ticket_query_repo.list_by_ids.return_value = []
    return uow


@pytest.fixture
def use_case(uow: FakeUnitOfWork) -> ResolveTicketCodeUseCase:
    return ResolveTicketCodeUseCase(uow=uow)


@pytest.mark.unit
class TestResolveTicketCode:
    @pytest.mark.parametrize('code', [None, '', '   '])
    async def test_blank_code_is_not_found(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork, code: str | None
    ) -> None:
        resolution = await use_case.resolve(code=code)

        assert resolution.kind is ResolutionKind.NOT_FOUND
        uow.ticket_query_repo.get_by_id.assert_not_awaited()

    async def test_numeric_code_resolves_single_ticket(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork
    ) -> None:
        uow.ticket_query_repo.get_by_id.return_value = _ticket(42, 'A1')

        resolution = await use_case.resolve(code=' 42 ')

        assert resolution.kind is ResolutionKind.SINGLE
        assert resolution.tickets[0].id == 42
        assert resolution.event is not None and resolution.event.id == 1
        uow.ticket_query_repo.get_by_id.assert_awaited_once_with(ticket_id=42)

    async def test_numeric_code_falls_through_to_qr_lookup(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork
    ) -> None:
        uow.ticket_query_repo.list_by_qr_code.return_value = [_ticket(1, 'A1', group='12345')]

        resolution = await use_case.resolve(code='12345')

        assert resolution.kind is ResolutionKind.SINGLE
        uow.ticket_query_repo.list_by_qr_code.assert_awaited_once_with(qr_code='12345')

    async def test_group_code_resolves_group(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork
    ) -> None:
        uow.ticket_query_repo.list_by_qr_code.return_value = [_ticket(8, 'A2'), _ticket(7, 'A1')]

        resolution = await use_case.resolve(code='group-1')

        assert resolution.kind is ResolutionKind.GROUP
        assert [ticket.seat for ticket in resolution.tickets] == ['A1', 'A2']
        assert resolution.legacy is False

    async def test_legacy_payload_resolves_by_ids(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork
    ) -> None:
        uow.ticket_query_repo.list_by_ids.return_value = [_ticket(17, 'A1')]

        resolution = await use_case.resolve(code='Ticket ID: 17\nSeat: A1\n---\nTicket ID: 18')

        assert resolution.kind is ResolutionKind.GROUP
        assert resolution.legacy is True
        uow.ticket_query_repo.list_by_ids.assert_awaited_once_with(ticket_ids=[17, 18])

    async def test_unknown_code_is_not_found(self, use_case: ResolveTicketCodeUseCase) -> None:
        resolution = await use_case.resolve(code='does-not-exist')

        assert resolution.kind is ResolutionKind.NOT_FOUND
        assert resolution.tickets == []
        assert resolution.event is None

    @pytest.mark.parametrize(
        'code',
        ['0', '2147483648', '99999999999999999999', '9' * 5000, '²', '٤٢'],
        ids=[
            'zero',
            'past-int4',
            'twenty-digits',
            'five-thousand-digits',
            'superscript',
            'arabic-indic',
        ],
    )
    async def test_digits_no_ticket_can_have_are_not_looked_up_as_ids(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork, code: str
    ) -> None:
        resolution = await use_case.resolve(code=code)

        assert resolution.kind is ResolutionKind.NOT_FOUND
        uow.ticket_query_repo.get_by_id.assert_not_awaited()
        uow.ticket_query_repo.list_by_qr_code.assert_awaited_once_with(qr_code=code)

    async def test_zero_padded_id_resolves(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork
    ) -> None:
        uow.ticket_query_repo.get_by_id.return_value = _ticket(42, 'A1')

        resolution = await use_case.resolve(code='0000000000042')

        assert resolution.kind is ResolutionKind.SINGLE
        uow.ticket_query_repo.get_by_id.assert_awaited_once_with(ticket_id=42)

    async def test_legacy_payload_skips_ids_out_of_range(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork
    ) -> None:
        uow.ticket_query_repo.list_by_ids.return_value = [_ticket(18, 'A2')]

        resolution = await use_case.resolve(
            code='Ticket ID: 99999999999999999999\n---\nTicket ID: 18'
        )

        assert resolution.kind is ResolutionKind.GROUP
        assert resolution.legacy is True
        uow.ticket_query_repo.list_by_ids.assert_awaited_once_with(ticket_ids=[18])

    async def test_legacy_payload_with_only_bad_ids_is_not_found(
        self, use_case: ResolveTicketCodeUseCase, uow: FakeUnitOfWork
    ) -> None:
        resolution = await use_case.resolve(
            code='Ticket ID: ²\n---\nTicket ID: 99999999999999999999'
        )

        assert resolution.kind is ResolutionKind.NOT_FOUND
        uow.ticket_query_repo.list_by_ids.assert_not_awaited()
