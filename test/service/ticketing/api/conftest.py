from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient
import pytest

from test.support.seed import PrivateEngineSession, insert_event, insert_user


async def _seed() -> dict[str, int]:
    async with PrivateEngineSession() as session:
        ids = {
            'admin': await insert_user(session, email='admin@example.com', role='ADMIN'),
            'organizer': await insert_user(session, email='olga@example.com', role='ORGANIZER'),
            'customer': await insert_user(session, email='cora@example.com', role='CUSTOMER'),
            'other_customer': await insert_user(
                session, email='carl@example.com', role='CUSTOMER'
            ),
            'staff': await insert_user(session, email='sam@example.com', role='STAFF'),
        }
        ids['event'] = await insert_event(
            session, organizer_id=ids['organizer'], price=100, seats=['A1', 'A2', 'A3']
        )
        await session.commit()
    return ids


@pytest.fixture
def seeded(client: TestClient, run_sync: Callable[..., Any]) -> dict[str, int]:
    """Users and one event, written after the client has rebuilt the schema."""
    return run_sync(_seed())


@pytest.fixture
def as_role(
    seeded: dict[str, int], auth_headers: Callable[..., dict[str, str]]
) -> Callable[[str], dict[str, str]]:
    roles = {
        'admin': 'ADMIN',
        'organizer': 'ORGANIZER',
        'customer': 'CUSTOMER',
        'other_customer': 'CUSTOMER',
        'staff': 'STAFF',
    }

    def _headers(who: str) -> dict[str, str]:
        return auth_headers(user_id=seeded[who], role=roles[who], email=f'{who}@example.com')

    return _headers


@pytest.fixture
def context() -> dict[str, Any]:
    """State shared by the Given/When/Then steps of one scenario."""
    return {}


from test.service.ticketing.api.steps.given import *  # noqa: E402, F401, F403
from test.service.ticketing.api.steps.then import *  # noqa: E402, F401, F403
from test.service.ticketing.api.steps.when import *  # noqa: E402, F401, F403
