from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class BorrowRequestModel(Base):
    __tablename__ = 'borrow_request'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    book_id: Mapped[int] = mapped_column(Integer, ForeignKey('book.id'), nullable=False)
    requested_from_date: Mapped[date] = mapped_column(Date, nullable=False)
    requested_to_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='PENDING', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        Index('ix_borrow_request_book_status', 'book_id', 'status'),
        Index(
            'uq_borrow_request_pending',
            'student_id',
            'book_id',
            unique=True,
            postgresql_where=text("status = 'PENDING'"),
        ),
    )
