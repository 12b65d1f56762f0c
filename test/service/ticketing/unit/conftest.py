import pytest

from test.service.ticketing.unit.fixtures import ImmediateTransactionRunner, RepositoryMocks


@pytest.fixture
def runner() -> ImmediateTransactionRunner:
    return ImmediateTransactionRunner()


@pytest.fixture
def repos() -> RepositoryMocks:
    return RepositoryMocks()
