from datetime import date, datetime, time

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Time, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class ReservationModel(Base):
    __tablename__ = 'reservation'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    book_id: Mapped[int] = mapped_column(Integer, ForeignKey('book.id'), nullable=False)
    table_id: Mapped[int] = mapped_column(Integer, ForeignKey('library_table.id'), nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    reserved_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='PENDING', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        Index('ix_reservation_seat_day', 'table_id', 'seat_number', 'reserved_date'),
        # Identical-slot races between two blocking reservations end here
        Index(
            'uq_reservation_blocking_slot',
            'table_id',
            'seat_number',
            'reserved_date',
            'start_time',
            'end_time',
            unique=True,
            postgresql_where=text("status IN ('PENDING', 'APPROVED')"),
        ),
    )
