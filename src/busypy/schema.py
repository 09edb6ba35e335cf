from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class ValueSpecDTO(BaseModel):
    name: Optional[str] = None
    list_kind: str
    type_name: str


class FunctionRecordDTO(BaseModel):
    package: str
    directory: str
    name: str
    args: List[ValueSpecDTO] = []
    rets: List[ValueSpecDTO] = []
    declaration: str
