"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import Optional

from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from household_budget.config import settings
from household_budget.domain.exceptions import InvalidMonthKey
from household_budget.domain.models import MonthKey
from household_budget.infrastructure.database.repositories import SqlBudgetPeriodStore
from household_budget.infrastructure.database.session import get_db
from household_budget.services.month_service import MonthService


def get_month_service(db: Session = Depends(get_db)) -> MonthService:
    """Provide a month service bound to the request's session"""
    return MonthService(
        SqlBudgetPeriodStore(db),
        accounts=settings.accounts,
        payday=settings.payday,
        tolerance=settings.balance_tolerance_ore,
        default_daily_rate=settings.default_daily_rate_ore,
        default_friday_rate=settings.default_friday_rate_ore,
    )


def get_today(today: Optional[date] = Query(None, description="Reference date, defaults to the server date")) -> date:
    """Reference date for calculations; the clock is only read here"""
    return today or date.today()


def get_month_key(month_key: str) -> MonthKey:
    """Parse the YYYY-MM path parameter"""
    try:
        return MonthKey.parse(month_key)
    except InvalidMonthKey as e:
        raise HTTPException(status_code=400, detail=str(e))
