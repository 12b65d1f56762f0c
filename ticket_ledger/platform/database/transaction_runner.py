"""
Transaction runner

Runs a unit of work inside one database transaction and hands it a
``Scope``: the single handle through which every repository operation of
that unit reaches the database. The transaction commits when the unit
returns and rolls back when it raises.

Nesting: a unit that already holds a scope passes it along as
``scope=...``; the inner unit then joins the outer transaction instead of
opening its own, so the outer unit stays atomic.

Driver errors are translated so callers only ever see the platform
exception hierarchy:
- serialization failure / deadlock / unique violation -> ConflictError
- anything else from the driver, including timeouts -> InfrastructureError
"""

from typing import Any, AsyncContextManager, Awaitable, Callable, Optional, TypeVar

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_ledger.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    InfrastructureError,
)
from ticket_ledger.platform.logging.loguru_io import Logger


_T = TypeVar('_T')

# SQLSTATE codes that mean "another transaction got there first"
CONFLICT_SQLSTATES = frozenset({'40001', '40P01', '23505'})


class Scope:
    """Handle to one open transaction. Only valid while its unit of work runs."""

    def __init__(self, session: AsyncSession) -> None:
        self._session: Optional[AsyncSession] = session

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError('Transaction scope used after its transaction ended')
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    def close(self) -> None:
        self._session = None

    def __repr__(self) -> str:
        return f'<Scope {"active" if self.is_active else "closed"}>'


UnitOfWork = Callable[[Scope], Awaitable[_T]]


def _sqlstate_of(error: DBAPIError) -> Optional[str]:
    orig: Any = error.orig
    # asyncpg exposes .sqlstate, psycopg .pgcode; the SQLAlchemy adapter may wrap either
    for candidate in (orig, getattr(orig, '__cause__', None)):
        if candidate is None:
            continue
        code = getattr(candidate, 'sqlstate', None) or getattr(candidate, 'pgcode', None)
        if code:
            return str(code)
    return None


def _is_sqlite_unique_violation(error: DBAPIError) -> bool:
    return 'UNIQUE constraint failed' in str(error.orig)


def translate_db_error(error: BaseException) -> CustomBaseError:
    if isinstance(error, DBAPIError):
        if _sqlstate_of(error) in CONFLICT_SQLSTATES or _is_sqlite_unique_violation(error):
            return ConflictError(f'Concurrent update conflict: {error.orig}')
        return InfrastructureError(f'Database error: {error.orig}')
    if isinstance(error, TimeoutError):
        return InfrastructureError('Database operation timed out')
    return InfrastructureError(f'Database error: {error}')


class TransactionRunner:
    def __init__(self, *, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    async def run(self, unit_of_work: UnitOfWork[_T], *, scope: Optional[Scope] = None) -> _T:
        """
        Execute ``unit_of_work`` atomically.

        Returns whatever the unit returns. Domain errors raised by the unit
        propagate unchanged after rollback; driver failures are translated.
        """
        if scope is not None:
            # Join the caller's transaction
            return await unit_of_work(scope)

        try:
            async with self.session_factory() as session:
                own_scope = Scope(session)
                try:
                    async with session.begin():
                        return await unit_of_work(own_scope)
                finally:
                    own_scope.close()
        except CustomBaseError:
            raise
        except (SQLAlchemyError, TimeoutError) as e:
            translated = translate_db_error(e)
            Logger.base.warning(f'🔁 [TX] Rolled back: {translated.message}')
            raise translated from e
