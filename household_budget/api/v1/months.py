"""Month endpoints - month switch, edits, balances and prognosis"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from household_budget.api.dependencies import get_month_key, get_month_service, get_today
from household_budget.api.v1.schemas import (
    AccountReportSchema,
    BalanceRequest,
    CalculationResultSchema,
    HolidaySchema,
    MonthListResponse,
    MonthResponse,
    MonthUpdateRequest,
    PrognosisEntry,
    PrognosisResponse,
)
from household_budget.domain.exceptions import InvalidCategoryData, MonthNotFoundError, UnknownAccountError
from household_budget.domain.models import MonthKey
from household_budget.domain.pay_period import pay_period_window
from household_budget.infrastructure.database.serialization import snapshot_from_payload
from household_budget.infrastructure.database.session import get_db
from household_budget.services.month_service import MonthService, MonthView

router = APIRouter()


def to_response(view: MonthView, payday: int) -> MonthResponse:
    window = pay_period_window(view.month_key, payday)
    result = view.result

    return MonthResponse(
        month_key=str(view.month_key),
        period_start=window.start,
        period_end=window.end,
        result=CalculationResultSchema(
            **{
                name: getattr(result, name)
                for name in CalculationResultSchema.model_fields
                if name not in ("holidays_in_period", "warnings", "is_balanced")
            },
            holidays_in_period=[
                HolidaySchema(date=h.date, name=h.name, source=h.source.value) for h in result.holidays_in_period
            ],
            warnings=[w.value for w in result.warnings],
            is_balanced=result.is_balanced,
        ),
        accounts=[
            AccountReportSchema(
                account=report.account,
                starting_balance=report.starting_balance,
                starting_balance_is_actual=report.starting_balance_is_actual,
                estimated_starting_balance=report.estimated_starting_balance.amount,
                estimate_available=report.estimated_starting_balance.available,
                estimate_source=report.estimated_starting_balance.source.value,
                final_balance=report.final_balance,
                estimated_final_balance=report.estimated_final_balance,
            )
            for report in view.accounts
        ],
    )


@router.get("/months", response_model=MonthListResponse)
def list_months(service: MonthService = Depends(get_month_service)):
    """Stored months, oldest first"""
    return MonthListResponse(months=[str(key) for key in service.months()])


@router.get("/months/{month_key}", response_model=MonthResponse)
def get_month(
    month: MonthKey = Depends(get_month_key),
    today: date = Depends(get_today),
    service: MonthService = Depends(get_month_service),
    db: Session = Depends(get_db),
):
    """
    Switch to a month.

    Creates the month on first access, reconciles the previous month's final
    balances, then estimates and calculates this month. All of it is persisted.
    """
    try:
        view = service.load_month(month, today)
        db.commit()
        return to_response(view, service.payday)
    except InvalidCategoryData as e:
        db.rollback()
        logging.warning(f"Stored month data is invalid: {e}", extra={"month": str(month)})
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"month": str(month)})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/months/{month_key}", response_model=MonthResponse)
def update_month(
    request_body: MonthUpdateRequest,
    month: MonthKey = Depends(get_month_key),
    today: date = Depends(get_today),
    service: MonthService = Depends(get_month_service),
    db: Session = Depends(get_db),
):
    """Replace the month's incomes, categories, rates and custom holidays"""
    try:
        snapshot = snapshot_from_payload(request_body.model_dump(mode="json"))
        view = service.update_month(month, snapshot, today)
        db.commit()
        return to_response(view, service.payday)
    except InvalidCategoryData as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"month": str(month)})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/months/{month_key}/balances/{account}", response_model=MonthResponse)
def set_starting_balance(
    account: str,
    request_body: BalanceRequest,
    month: MonthKey = Depends(get_month_key),
    today: date = Depends(get_today),
    service: MonthService = Depends(get_month_service),
    db: Session = Depends(get_db),
):
    """Record the actual starting balance of an account"""
    try:
        view = service.set_starting_balance(month, account, request_body.amount, today)
        db.commit()
        return to_response(view, service.payday)
    except UnknownAccountError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"month": str(month)})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/months/{month_key}/balances/{account}", response_model=MonthResponse)
def clear_starting_balance(
    account: str,
    month: MonthKey = Depends(get_month_key),
    today: date = Depends(get_today),
    service: MonthService = Depends(get_month_service),
    db: Session = Depends(get_db),
):
    """Forget the actual starting balance so the estimate is used again"""
    try:
        view = service.clear_starting_balance(month, account, today)
        db.commit()
        return to_response(view, service.payday)
    except UnknownAccountError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except MonthNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"month": str(month)})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/prognosis", response_model=PrognosisResponse)
def get_prognosis(service: MonthService = Depends(get_month_service)):
    """Running balances per account across all stored months"""
    projection = service.prognosis()
    return PrognosisResponse(
        entries=[
            PrognosisEntry(month_key=str(month_key), account=account, starting_balance=start, final_balance=final)
            for month_key, balances in projection.items()
            for account, (start, final) in balances.items()
        ]
    )
