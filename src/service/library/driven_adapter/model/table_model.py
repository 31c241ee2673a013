from sqlalchemy import ARRAY, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class TableModel(Base):
    __tablename__ = 'library_table'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    seats: Mapped[list[int]] = mapped_column(ARRAY(Integer), nullable=False)
