"""
Test Configuration and Fixtures

This module provides:
- Test environment variables, set before any application module reads them
- A throw-away SQLite database per test (file based, so several
  connections can contend for it the way production sessions do)

Architecture:
- Unit tests (test/**/unit/): mock repositories, never touch the database
- Integration / platform tests: real SQLAlchemy engine over aiosqlite
"""

# =============================================================================
# Environment setup MUST happen before any other imports:
# settings and the loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('DEPLOY_ENV', 'test')
    os.environ.setdefault('SQLITE_BUSY_TIMEOUT_SECONDS', '15')


_early_setup_test_environment()

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402

from ticket_ledger.platform.database.orm_db_setting import (  # noqa: E402
    Database,
    create_db_and_tables,
)


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Fresh schema in a temporary SQLite file for each test"""
    db = Database(database_url=f'sqlite+aiosqlite:///{tmp_path / "ticket_ledger_test.db"}')
    await create_db_and_tables(db)
    yield db
    await db.dispose()


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        path = str(item.path)
        if '/unit/' in path:
            item.add_marker(pytest.mark.unit)
        elif '/integration/' in path:
            item.add_marker(pytest.mark.integration)
