# backend/app/api/reports.py
from typing import Optional

from fastapi import APIRouter, Depends

from backend.app.aggregation import budget_status, category_report
from backend.app.api.deps import get_store
from backend.app.store import RecordStore

router = APIRouter()


@router.get("/categories")
def categories(month: Optional[str] = None, store: RecordStore = Depends(get_store)):
    """
    Per-category income, expense and entry count, optionally for one month (YYYY-MM).
    """
    return category_report(store.list_all("entries"), month)


@router.get("/budgets")
def budgets(month: Optional[str] = None, store: RecordStore = Depends(get_store)):
    """
    Spend against each budget in its month:
    - spent / remaining / spent_percent
    - status: overspent, close to limit (>= 80%) or within budget
    """
    return {"summary": budget_status(store.list_all("budgets"), store.list_all("entries"), month)}
