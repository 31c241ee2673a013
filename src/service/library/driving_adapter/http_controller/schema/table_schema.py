from typing import List

from pydantic import BaseModel


class TableResponse(BaseModel):
    model_config = {
        'json_schema_extra': {'example': {'id': 1, 'label': 'A1', 'seats': [1, 2, 3, 4]}},
    }

    id: int
    label: str
    seats: List[int]
