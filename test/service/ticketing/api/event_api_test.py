from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient
import pytest

from test.support.seed import PrivateEngineSession, fetch_event


EVENT_URL = '/api/event'


@pytest.mark.api
class TestEventApi:
    def test_create_event(
        self,
        client: TestClient,
        seeded: dict[str, int],
        as_role: Callable[[str], dict[str, str]],
    ) -> None:
        # Given
        payload = {
            'name': 'Tihar Lights',
            'price': 250,
            'category': 'festival',
            'location': 'Bhaktapur',
            'seats': ['A1', 'A2'],
            'event_start': '2026-11-01 18:00',
            'event_end': '2026-11-01 22:00',
        }

        # When
        response = client.post(EVENT_URL, json=payload, headers=as_role('organizer'))

        # Then
        assert response.status_code == 201
        body = response.json()
        assert body['organizer_id'] == seeded['organizer']
        assert body['income'] == 0
        assert body['is_deleted'] is False
        assert body['event_start'].startswith('2026-11-01T12:15:00')

    def test_customer_cannot_create_event(
        self,
        client: TestClient,
        seeded: dict[str, int],
        as_role: Callable[[str], dict[str, str]],
    ) -> None:
        response = client.post(
            EVENT_URL, json={'name': 'Nope', 'price': 10}, headers=as_role('customer')
        )

        assert response.status_code == 403

    def test_negative_price_is_rejected(
        self,
        client: TestClient,
        seeded: dict[str, int],
        as_role: Callable[[str], dict[str, str]],
    ) -> None:
        response = client.post(
            EVENT_URL, json={'name': 'Free money', 'price': -1}, headers=as_role('organizer')
        )

        assert response.status_code == 400

    def test_delete_unsold_event(
        self,
        client: TestClient,
        seeded: dict[str, int],
        as_role: Callable[[str], dict[str, str]],
        run_sync: Callable[..., Any],
    ) -> None:
        response = client.delete(f'{EVENT_URL}/{seeded["event"]}', headers=as_role('organizer'))

        assert response.status_code == 204

        async def _load():
            async with PrivateEngineSession() as session:
                return await fetch_event(session, seeded['event'])

        assert run_sync(_load()) is None

    def test_delete_sold_upcoming_event_conflicts(
        self,
        client: TestClient,
        seeded: dict[str, int],
        as_role: Callable[[str], dict[str, str]],
    ) -> None:
        booked = client.post(
            '/api/ticket',
            json={'event_id': seeded['event'], 'seats': ['A1']},
            headers=as_role('customer'),
        )
        assert booked.status_code == 201

        response = client.delete(f'{EVENT_URL}/{seeded["event"]}', headers=as_role('admin'))

        assert response.status_code == 409

    def test_reserved_seats(
        self,
        client: TestClient,
        seeded: dict[str, int],
        as_role: Callable[[str], dict[str, str]],
    ) -> None:
        client.post(
            '/api/ticket',
            json={'event_id': seeded['event'], 'seats': ['A3', 'A1']},
            headers=as_role('customer'),
        )

        response = client.get(
            f'{EVENT_URL}/{seeded["event"]}/reserved_seats', headers=as_role('staff')
        )

        assert response.status_code == 200
        body = response.json()
        assert body['event_id'] == seeded['event']
        assert sorted(body['seats']) == ['A1', 'A3']
        assert body['count'] == 2


@pytest.mark.api
class TestHealthApi:
    def test_health(self, client: TestClient) -> None:
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_metrics(self, client: TestClient) -> None:
        response = client.get('/metrics')

        assert response.status_code == 200


@pytest.mark.api
class TestEventIdOutOfRangeApi:
    def test_reserved_seats_of_unknown_event(
        self,
        client: TestClient,
        seeded: dict[str, int],
        as_role: Callable[[str], dict[str, str]],
    ) -> None:
        response = client.get(f'{EVENT_URL}/{2**70}/reserved_seats', headers=as_role('admin'))

        assert response.status_code == 404

    def test_delete_of_unknown_event(
        self,
        client: TestClient,
        seeded: dict[str, int],
        as_role: Callable[[str], dict[str, str]],
    ) -> None:
        response = client.delete(f'{EVENT_URL}/{2**40}', headers=as_role('admin'))

        assert response.status_code == 404
