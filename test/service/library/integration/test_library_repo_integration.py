"""
Repository integration tests on PostgreSQL

Covers what the in-memory fakes can only imitate: the partial unique
indexes, compare-and-swap status updates, row locks and unit-of-work
rollback.
"""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import ConflictError
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.enum.availability_status import AvailabilityStatus
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus
from src.service.library.domain.enum.reservation_status import ReservationStatus
from src.service.library.domain.value_object.time_slot import TimeSlot
from src.service.library.driven_adapter.repo.book_repo_impl import BookRepoImpl
from src.service.library.driven_adapter.repo.borrow_request_repo_impl import (
    BorrowRequestRepoImpl,
)
from src.service.library.driven_adapter.repo.reservation_repo_impl import ReservationRepoImpl
from src.service.library.driven_adapter.repo.table_repo_impl import TableRepoImpl


NOW = datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)
RESERVED_DATE = date(2024, 1, 15)


def new_reservation(**overrides) -> Reservation:
    params = {
        'student_id': 7,
        'book_id': 1,
        'table_id': 1,
        'seat_number': 1,
        'reserved_date': RESERVED_DATE,
        'time_slot': TimeSlot.parse('09:00', '11:00'),
        'now': NOW,
    }
    params.update(overrides)
    return Reservation.create(**params)


def new_borrow_request(student_id: int = 7) -> BorrowRequest:
    return BorrowRequest.create(
        student_id=student_id,
        book_id=1,
        today=NOW.date(),
        now=NOW,
        window_days=14,
        max_span_days=30,
    )


@pytest.mark.integration
class TestReservationRepoImpl:
    @pytest.mark.asyncio
    async def test_identical_blocking_slot_is_rejected(
        self, pg_session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        async with pg_session_maker() as session:
            repo = ReservationRepoImpl(session)
            await repo.create(reservation=new_reservation())

            with pytest.raises(ConflictError, match='Slot already reserved'):
                await repo.create(reservation=new_reservation(student_id=8))

    @pytest.mark.asyncio
    async def test_slot_is_free_again_after_denial(
        self, pg_session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        """
        Given a PENDING reservation for seat 1 09:00-11:00
        When it is DENIED
        Then the identical slot can be inserted again
        """
        async with pg_session_maker() as session:
            # Arrange
            repo = ReservationRepoImpl(session)
            first = await repo.create(reservation=new_reservation())
            await repo.update_status(
                reservation=first.decide('DENIED', now=NOW),
                expected_status=ReservationStatus.PENDING,
            )

            # Act
            second = await repo.create(reservation=new_reservation(student_id=8))
            await session.commit()

            # Assert
            assert second.id != first.id
            blocking = await repo.list_blocking_for_seat(
                table_id=1, seat_number=1, reserved_date=RESERVED_DATE
            )
            assert [r.id for r in blocking] == [second.id]

    @pytest.mark.asyncio
    async def test_lost_compare_and_swap_returns_none(
        self, pg_session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        """
        Given two administrators loaded the same PENDING reservation
        When the first decision commits
        Then the second decision matches no row
        """
        # Arrange
        async with pg_session_maker() as session:
            stale = await ReservationRepoImpl(session).create(reservation=new_reservation())
            await session.commit()

        # Act
        async with pg_session_maker() as session:
            approved = await ReservationRepoImpl(session).update_status(
                reservation=stale.decide('APPROVED', now=NOW),
                expected_status=ReservationStatus.PENDING,
            )
            await session.commit()

        async with pg_session_maker() as session:
            repo = ReservationRepoImpl(session)
            lost = await repo.update_status(
                reservation=stale.decide('DENIED', now=NOW),
                expected_status=ReservationStatus.PENDING,
            )
            stored = await repo.get_by_id(reservation_id=stale.id)

        # Assert
        assert approved is not None
        assert approved.status == ReservationStatus.APPROVED
        assert lost is None
        assert stored is not None
        assert stored.status == ReservationStatus.APPROVED


@pytest.mark.integration
class TestBorrowRequestRepoImpl:
    @pytest.mark.asyncio
    async def test_second_pending_request_is_rejected(
        self, pg_session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        async with pg_session_maker() as session:
            repo = BorrowRequestRepoImpl(session)
            first = await repo.create(borrow_request=new_borrow_request())

            with pytest.raises(ConflictError, match='pending request'):
                await repo.create(borrow_request=new_borrow_request())

        assert first.status == BorrowRequestStatus.PENDING

    @pytest.mark.asyncio
    async def test_new_request_allowed_after_decision(
        self, pg_session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        async with pg_session_maker() as session:
            repo = BorrowRequestRepoImpl(session)
            first = await repo.create(borrow_request=new_borrow_request())
            await repo.update_status(
                borrow_request=first.decide('DENIED', now=NOW),
                expected_status=BorrowRequestStatus.PENDING,
            )

            second = await repo.create(borrow_request=new_borrow_request())

            pending = await repo.find_pending(student_id=7, book_id=1)
            assert pending is not None
            assert pending.id == second.id


@pytest.mark.integration
class TestRowLocksAndUnitOfWork:
    @pytest.mark.asyncio
    async def test_table_lock_blocks_second_submission(
        self, pg_session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        async with pg_session_maker() as holder, pg_session_maker() as waiter:
            table = await TableRepoImpl(holder).get_by_id_for_update(table_id=1)
            assert table is not None
            assert table.sorted_seats == [1, 2, 3, 4]

            await waiter.execute(text("SET LOCAL lock_timeout = '200ms'"))
            with pytest.raises(DBAPIError):
                await TableRepoImpl(waiter).get_by_id_for_update(table_id=1)

    @pytest.mark.asyncio
    async def test_uow_without_commit_rolls_back(
        self, pg_session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        async with pg_session_maker() as session:
            uow = SqlAlchemyUnitOfWork(session)
            async with uow:
                await uow.reservation_repo.create(reservation=new_reservation())
                await uow.book_repo.update_availability(
                    book_id=1, availability_status=AvailabilityStatus.BORROWED
                )

        async with pg_session_maker() as session:
            assert await ReservationRepoImpl(session).list_by_filter() == []
            book = await BookRepoImpl(session).get_by_id(book_id=1)
            assert book is not None
            assert book.availability_status == AvailabilityStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_uow_commit_persists(
        self, pg_session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        async with pg_session_maker() as session:
            uow = SqlAlchemyUnitOfWork(session)
            async with uow:
                created = await uow.reservation_repo.create(reservation=new_reservation())
                await uow.commit()

        async with pg_session_maker() as session:
            books = await BookRepoImpl(session).list_by_ids(book_ids=[1, 2, 99])
            stored = await ReservationRepoImpl(session).list_by_filter(student_id=7)

        assert [r.id for r in stored] == [created.id]
        assert sorted(b.id for b in books) == [1, 2]
