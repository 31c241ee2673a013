from typing import List

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.library.app.query.list_tables_use_case import ListTablesUseCase
from src.service.library.domain.entity.actor_entity import ActorEntity
from src.service.library.driving_adapter.http_controller.auth.actor_auth import get_current_actor
from src.service.library.driving_adapter.http_controller.schema.table_schema import TableResponse


router = APIRouter()


@router.get('', response_model=List[TableResponse])
@Logger.io
async def list_tables(
    current_actor: ActorEntity = Depends(get_current_actor),
    use_case: ListTablesUseCase = Depends(ListTablesUseCase.depends),
) -> List[TableResponse]:
    tables = await use_case.execute()
    return [
        TableResponse(id=table.id or 0, label=table.label, seats=table.sorted_seats)
        for table in tables
    ]
