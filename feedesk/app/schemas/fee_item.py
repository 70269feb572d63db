"""Fee item schemas."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

RawAmount = Union[int, float, str, None]


class FeeItemInput(BaseModel):
    label: str = ""
    amount: RawAmount = ""


class FeeItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    label: str
    amount: int
    sort_order: int = 0
