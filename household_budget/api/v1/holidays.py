"""Holiday calendar endpoints"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from household_budget.api.dependencies import get_month_service, get_today
from household_budget.api.v1.schemas import HolidayListResponse, HolidaySchema
from household_budget.domain.exceptions import InvalidCategoryData, InvalidMonthKey
from household_budget.domain.holidays import holidays_for_year, upcoming_holidays
from household_budget.domain.models import MonthKey
from household_budget.services.month_service import MonthService

router = APIRouter()


@router.get("/holidays/upcoming", response_model=HolidayListResponse)
def get_upcoming_holidays(
    count: int = Query(5, ge=1, le=20, description="Number of holidays, usually 5 or 10"),
    month_key: Optional[str] = Query(None, description="Stored month whose custom holidays are included"),
    today: date = Depends(get_today),
    service: MonthService = Depends(get_month_service),
):
    """Next holidays from today across this and next year"""
    custom_holidays = []
    if month_key is not None:
        try:
            snapshot = service.store.get(MonthKey.parse(month_key))
        except InvalidMonthKey as e:
            raise HTTPException(status_code=400, detail=str(e))
        except InvalidCategoryData as e:
            raise HTTPException(status_code=422, detail=str(e))
        if snapshot is not None:
            custom_holidays = snapshot.custom_holidays

    holidays = upcoming_holidays(today, count, custom_holidays)
    return HolidayListResponse(
        holidays=[HolidaySchema(date=h.date, name=h.name, source=h.source.value) for h in holidays]
    )


@router.get("/holidays/{year}", response_model=HolidayListResponse)
def get_holidays_for_year(year: int = Path(..., ge=1900, le=2200)):
    """Public holidays of a year"""
    return HolidayListResponse(
        holidays=[HolidaySchema(date=h.date, name=h.name, source=h.source.value) for h in holidays_for_year(year)]
    )
