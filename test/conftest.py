"""
Test Configuration and Fixtures

This module provides:
- Environment setup before application modules read settings
- In-memory repositories behind the unit-of-work interface
- A fixed clock so date rules are deterministic
- A TestClient wired with the fakes for controller tests
- A freshly created PostgreSQL schema for integration tests

Architecture:
- Unit tests (test/**/unit/): use the fakes or AsyncMock collaborators directly
- Controller tests: FastAPI dependency_overrides + DI provider overrides
- Integration tests (test/**/integration/): real repositories on PostgreSQL, skipped when
  no server is reachable
"""

# =============================================================================
# Environment setup MUST happen before any application imports
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    # Integration tests drop and recreate the schema, so never point them at a real database
    os.environ['POSTGRES_DB'] = 'library_reservation_test_db'
    os.environ.setdefault('DEPLOY_ENV', 'test')
    os.environ.setdefault('LOG_TO_FILE', 'false')


_early_setup_test_environment()

import copy  # noqa: E402
from collections.abc import AsyncGenerator, Generator, Iterable  # noqa: E402
from datetime import date, datetime  # noqa: E402
from typing import List, Optional  # noqa: E402

import attrs  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import make_url, text  # noqa: E402
from sqlalchemy.exc import DBAPIError  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.platform.app_factory import create_app  # noqa: E402
from src.platform.config.core_setting import Settings, settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.config.wire_modules import WIRE_MODULES  # noqa: E402
from src.platform.database.orm_db_setting import AsyncEngineManager, Base  # noqa: E402
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work  # noqa: E402
from src.platform.exception.exceptions import ConflictError  # noqa: E402
from src.service.library.app.interface.i_book_repo import IBookRepo  # noqa: E402
from src.service.library.app.interface.i_borrow_request_repo import (  # noqa: E402
    IBorrowRequestRepo,
)
from src.service.library.app.interface.i_clock import IClock  # noqa: E402
from src.service.library.app.interface.i_reservation_repo import IReservationRepo  # noqa: E402
from src.service.library.app.interface.i_table_repo import ITableRepo  # noqa: E402
from src.service.library.domain.entity.book_entity import Book  # noqa: E402
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest  # noqa: E402
from src.service.library.domain.entity.reservation_entity import Reservation  # noqa: E402
from src.service.library.domain.entity.table_entity import Table  # noqa: E402
from src.service.library.domain.enum.availability_status import AvailabilityStatus  # noqa: E402
from src.service.library.domain.enum.borrow_request_status import (  # noqa: E402
    BorrowRequestStatus,
)
from src.service.library.domain.enum.reservation_status import ReservationStatus  # noqa: E402
from src.service.library.driven_adapter.model.book_model import BookModel  # noqa: E402
from src.service.library.driven_adapter.model.table_model import TableModel  # noqa: E402


# =============================================================================
# Test data
# =============================================================================
FIXED_NOW = datetime(2024, 1, 10, 9, 0, 0)
TODAY = FIXED_NOW.date()
RESERVED_DATE = date(2024, 1, 15)

TABLE_A1_ID = 1
TABLE_B2_ID = 2
AVAILABLE_BOOK_ID = 1
BORROWED_BOOK_ID = 2
MAINTENANCE_BOOK_ID = 3
STUDENT_ID = 7
ANOTHER_STUDENT_ID = 8
ADMIN_ID = 1

STUDENT_HEADERS = {'X-Actor-Id': str(STUDENT_ID), 'X-Actor-Role': 'STUDENT'}
ANOTHER_STUDENT_HEADERS = {'X-Actor-Id': str(ANOTHER_STUDENT_ID), 'X-Actor-Role': 'STUDENT'}
ADMIN_HEADERS = {'X-Actor-Id': str(ADMIN_ID), 'X-Actor-Role': 'ADMIN'}


# =============================================================================
# Fakes
# =============================================================================
class FixedClock(IClock):
    def __init__(self, now: datetime) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def today(self) -> date:
        return self._now.date()


class InMemoryTableRepo(ITableRepo):
    def __init__(self) -> None:
        self.tables: dict[int, Table] = {}

    async def get_by_id_for_update(self, *, table_id: int) -> Optional[Table]:
        return self.tables.get(table_id)

    async def list_tables(self) -> List[Table]:
        return sorted(self.tables.values(), key=lambda t: t.label)


class InMemoryBookRepo(IBookRepo):
    def __init__(self) -> None:
        self.books: dict[int, Book] = {}

    async def get_by_id(self, *, book_id: int) -> Optional[Book]:
        return self.books.get(book_id)

    async def list_by_ids(self, *, book_ids: Iterable[int]) -> List[Book]:
        return [self.books[book_id] for book_id in set(book_ids) if book_id in self.books]

    async def get_by_id_for_update(self, *, book_id: int) -> Optional[Book]:
        return self.books.get(book_id)

    async def update_availability(
        self, *, book_id: int, availability_status: AvailabilityStatus
    ) -> Optional[Book]:
        book = self.books.get(book_id)
        if not book:
            return None
        updated = attrs.evolve(book, availability_status=availability_status)
        self.books[book_id] = updated
        return updated


class InMemoryReservationRepo(IReservationRepo):
    def __init__(self) -> None:
        self.reservations: dict[int, Reservation] = {}
        self._next_id = 1

    async def create(self, *, reservation: Reservation) -> Reservation:
        # Mirrors the partial unique index on identical blocking slots
        for existing in self.reservations.values():
            if (
                existing.is_blocking
                and existing.occupies_same_seat_and_day(
                    table_id=reservation.table_id,
                    seat_number=reservation.seat_number,
                    day=reservation.reserved_date,
                )
                and existing.time_slot == reservation.time_slot
            ):
                raise ConflictError('Slot already reserved')
        created = attrs.evolve(reservation, id=self._next_id)
        self.reservations[created.id] = created  # type: ignore[index]
        self._next_id += 1
        return created

    async def get_by_id(self, *, reservation_id: int) -> Optional[Reservation]:
        return self.reservations.get(reservation_id)

    async def list_blocking_for_seat(
        self, *, table_id: int, seat_number: int, reserved_date: date
    ) -> List[Reservation]:
        return [
            r
            for r in self.reservations.values()
            if r.is_blocking
            and r.occupies_same_seat_and_day(
                table_id=table_id, seat_number=seat_number, day=reserved_date
            )
        ]

    async def list_by_filter(
        self,
        *,
        status: Optional[ReservationStatus] = None,
        student_id: Optional[int] = None,
    ) -> List[Reservation]:
        found = [
            r
            for r in self.reservations.values()
            if (status is None or r.status == status)
            and (student_id is None or r.student_id == student_id)
        ]
        return sorted(found, key=lambda r: (r.created_at, r.id), reverse=True)

    async def update_status(
        self, *, reservation: Reservation, expected_status: ReservationStatus
    ) -> Optional[Reservation]:
        stored = self.reservations.get(reservation.id)  # type: ignore[arg-type]
        if not stored or stored.status != expected_status:
            return None
        updated = attrs.evolve(
            stored, status=reservation.status, updated_at=reservation.updated_at
        )
        self.reservations[updated.id] = updated  # type: ignore[index]
        return updated


class InMemoryBorrowRequestRepo(IBorrowRequestRepo):
    def __init__(self) -> None:
        self.borrow_requests: dict[int, BorrowRequest] = {}
        self._next_id = 1

    async def create(self, *, borrow_request: BorrowRequest) -> BorrowRequest:
        # Mirrors the partial unique index on (student_id, book_id) WHERE PENDING
        if await self.find_pending(
            student_id=borrow_request.student_id, book_id=borrow_request.book_id
        ):
            raise ConflictError('You already have a pending request for this book')
        created = attrs.evolve(borrow_request, id=self._next_id)
        self.borrow_requests[created.id] = created  # type: ignore[index]
        self._next_id += 1
        return created

    async def get_by_id(self, *, request_id: int) -> Optional[BorrowRequest]:
        return self.borrow_requests.get(request_id)

    async def find_pending(self, *, student_id: int, book_id: int) -> Optional[BorrowRequest]:
        for r in self.borrow_requests.values():
            if r.student_id == student_id and r.book_id == book_id and r.is_pending:
                return r
        return None

    async def list_by_filter(
        self,
        *,
        status: Optional[BorrowRequestStatus] = None,
        student_id: Optional[int] = None,
    ) -> List[BorrowRequest]:
        found = [
            r
            for r in self.borrow_requests.values()
            if (status is None or r.status == status)
            and (student_id is None or r.student_id == student_id)
        ]
        return sorted(found, key=lambda r: (r.created_at, r.id), reverse=True)

    async def update_status(
        self, *, borrow_request: BorrowRequest, expected_status: BorrowRequestStatus
    ) -> Optional[BorrowRequest]:
        stored = self.borrow_requests.get(borrow_request.id)  # type: ignore[arg-type]
        if not stored or stored.status != expected_status:
            return None
        updated = attrs.evolve(
            stored, status=borrow_request.status, updated_at=borrow_request.updated_at
        )
        self.borrow_requests[updated.id] = updated  # type: ignore[index]
        return updated


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    Snapshot on enter, restore on rollback.

    commit() moves the snapshot forward, so the rollback that always runs on
    exit only discards uncommitted writes, like a database transaction.
    """

    def __init__(self) -> None:
        self.table_repo = InMemoryTableRepo()
        self.book_repo = InMemoryBookRepo()
        self.reservation_repo = InMemoryReservationRepo()
        self.borrow_request_repo = InMemoryBorrowRequestRepo()
        self.commit_count = 0
        self._snapshot: dict = {}

    def _state(self) -> dict:
        return copy.deepcopy(
            {
                'books': self.book_repo.books,
                'reservations': self.reservation_repo.reservations,
                'reservation_next_id': self.reservation_repo._next_id,
                'borrow_requests': self.borrow_request_repo.borrow_requests,
                'borrow_request_next_id': self.borrow_request_repo._next_id,
            }
        )

    async def __aenter__(self) -> AbstractUnitOfWork:
        self._snapshot = self._state()
        return await super().__aenter__()

    async def _commit(self) -> None:
        self.commit_count += 1
        self._snapshot = self._state()

    async def rollback(self) -> None:
        if not self._snapshot:
            return
        self.book_repo.books = self._snapshot['books']
        self.reservation_repo.reservations = self._snapshot['reservations']
        self.reservation_repo._next_id = self._snapshot['reservation_next_id']
        self.borrow_request_repo.borrow_requests = self._snapshot['borrow_requests']
        self.borrow_request_repo._next_id = self._snapshot['borrow_request_next_id']
        self._snapshot = self._state()


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(BORROW_WINDOW_DAYS=14, BORROW_MAX_SPAN_DAYS=30)


@pytest.fixture
def uow() -> InMemoryUnitOfWork:
    """Unit of work seeded with two tables and three books"""
    unit_of_work = InMemoryUnitOfWork()
    unit_of_work.table_repo.tables = {
        TABLE_A1_ID: Table(label='A1', seats=[1, 2, 3, 4], id=TABLE_A1_ID),
        TABLE_B2_ID: Table(label='B2', seats=[1, 2], id=TABLE_B2_ID),
    }
    unit_of_work.book_repo.books = {
        AVAILABLE_BOOK_ID: Book(
            title='Clean Code', author='Robert C. Martin', id=AVAILABLE_BOOK_ID
        ),
        BORROWED_BOOK_ID: Book(
            title='Refactoring',
            author='Martin Fowler',
            availability_status=AvailabilityStatus.BORROWED,
            id=BORROWED_BOOK_ID,
        ),
        MAINTENANCE_BOOK_ID: Book(
            title='Design Patterns',
            author='Gang of Four',
            availability_status=AvailabilityStatus.MAINTENANCE,
            id=MAINTENANCE_BOOK_ID,
        ),
    }
    return unit_of_work


@pytest.fixture
def client(uow: InMemoryUnitOfWork, clock: FixedClock) -> Generator[TestClient, None, None]:
    """TestClient backed by the in-memory unit of work and the fixed clock"""
    app = create_app(title_suffix=' (Test)')
    app.dependency_overrides[get_unit_of_work] = lambda: uow
    container.wire(modules=WIRE_MODULES)
    with container.clock.override(clock):
        with TestClient(app) as test_client:
            yield test_client
    container.unwire()
    app.dependency_overrides.clear()


@pytest.fixture
def student_headers() -> dict[str, str]:
    return dict(STUDENT_HEADERS)


@pytest.fixture
def another_student_headers() -> dict[str, str]:
    return dict(ANOTHER_STUDENT_HEADERS)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return dict(ADMIN_HEADERS)


# =============================================================================
# PostgreSQL (integration tests)
# =============================================================================
async def _ensure_test_database() -> None:
    url = make_url(settings.DATABASE_URL_ASYNC)
    engine = create_async_engine(url.set(database='postgres'), isolation_level='AUTOCOMMIT')
    try:
        async with engine.connect() as conn:
            exists = await conn.scalar(
                text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': url.database}
            )
            if not exists:
                await conn.execute(text(f'CREATE DATABASE "{url.database}"'))
    finally:
        await engine.dispose()


@pytest.fixture
async def pg_session_maker() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh schema seeded with table A1 and books 1-2; skips without PostgreSQL"""
    manager = AsyncEngineManager()
    try:
        await _ensure_test_database()
        async with manager.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, DBAPIError) as e:
        await manager.dispose()
        pytest.skip(f'PostgreSQL not reachable: {e}')

    session_maker = manager.get_session_maker()
    async with session_maker() as session:
        session.add(TableModel(id=TABLE_A1_ID, label='A1', seats=[1, 2, 3, 4]))
        session.add_all(
            [
                BookModel(id=AVAILABLE_BOOK_ID, title='Clean Code', author='Robert C. Martin'),
                BookModel(
                    id=BORROWED_BOOK_ID,
                    title='Refactoring',
                    author='Martin Fowler',
                    availability_status=AvailabilityStatus.BORROWED.value,
                ),
            ]
        )
        await session.commit()

    yield session_maker

    await manager.dispose()
