from collections.abc import Iterator

from dependency_injector import providers
import pytest

from ticket_ledger.platform.config.di import Container
from ticket_ledger.platform.database.orm_db_setting import Database
from test.service.ticketing.integration.given import given_event, given_user


@pytest.fixture
def container(database: Database) -> Iterator[Container]:
    """A fresh container wired to the per-test database"""
    container = Container()
    container.database.override(providers.Object(database))
    yield container
    container.reset_override()
    container.reset_singletons()


@pytest.fixture
async def alice(database: Database) -> int:
    return await given_user(database, email='alice@example.com')


@pytest.fixture
async def bob(database: Database) -> int:
    return await given_user(database, email='bob@example.com')


@pytest.fixture
async def admin(database: Database) -> int:
    return await given_user(database, email='admin@example.com', role='admin')


@pytest.fixture
async def event_id(database: Database) -> int:
    return await given_event(database)
