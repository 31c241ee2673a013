from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.library.app.interface.i_table_repo import ITableRepo
from src.service.library.domain.entity.table_entity import Table
from src.service.library.driven_adapter.model.table_model import TableModel


class TableRepoImpl(ITableRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_table: TableModel) -> Table:
        return Table(label=db_table.label, seats=db_table.seats or [], id=db_table.id)

    @Logger.io
    async def get_by_id_for_update(self, *, table_id: int) -> Optional[Table]:
        result = await self.session.execute(
            select(TableModel).where(TableModel.id == table_id).with_for_update()
        )
        db_table = result.scalar_one_or_none()
        return TableRepoImpl._to_entity(db_table) if db_table else None

    @Logger.io
    async def list_tables(self) -> List[Table]:
        result = await self.session.execute(select(TableModel).order_by(TableModel.label))
        return [TableRepoImpl._to_entity(db_table) for db_table in result.scalars().all()]
