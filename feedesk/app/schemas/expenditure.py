"""Expenditure schemas."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict

from feedesk.app.schemas.fee_item import RawAmount


class ExpenditureDraft(BaseModel):
    date: Optional[dt.date] = None
    title: str = ""
    amount: RawAmount = ""
    notes: str = ""


class Expenditure(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: dt.date
    title: str
    amount: int
    notes: str
    created_at: dt.datetime
    updated_at: dt.datetime


class ExpenditureFilter(BaseModel):
    search: str = ""
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None
