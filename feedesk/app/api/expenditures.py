"""Expenditure routes."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from feedesk.app.api.deps import get_ledger
from feedesk.app.schemas.expenditure import Expenditure, ExpenditureDraft, ExpenditureFilter
from feedesk.app.services.ledger import Ledger

router = APIRouter(prefix="/expenditures", tags=["expenditures"])


@router.get("/", response_model=List[Expenditure])
async def list_expenditures(
    search: str = "",
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    ledger: Ledger = Depends(get_ledger),
):
    return ledger.filter_expenditures(ExpenditureFilter(search=search, date_from=date_from, date_to=date_to))


@router.post("/", response_model=Expenditure, status_code=status.HTTP_201_CREATED)
async def create_expenditure(payload: ExpenditureDraft, ledger: Ledger = Depends(get_ledger)):
    return ledger.create_expenditure(payload)


@router.get("/{expenditure_id}", response_model=Expenditure)
async def get_expenditure(expenditure_id: int, ledger: Ledger = Depends(get_ledger)):
    return ledger.get_expenditure(expenditure_id)


@router.put("/{expenditure_id}", response_model=Expenditure)
async def update_expenditure(expenditure_id: int, payload: ExpenditureDraft, ledger: Ledger = Depends(get_ledger)):
    return ledger.update_expenditure(expenditure_id, payload)


@router.delete("/{expenditure_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expenditure(expenditure_id: int, ledger: Ledger = Depends(get_ledger)):
    ledger.delete_expenditure(expenditure_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
