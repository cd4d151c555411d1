"""Pydantic schemas for API request/response validation"""

import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CategorySchema(BaseModel):
    """Budget category; amounts in öre"""

    id: str = Field(..., min_length=1)
    name: str
    amount: int = 0
    type: Optional[Literal["cost", "savings"]] = None  # subcategories inherit the parent's
    account: Optional[str] = None
    financing: Literal["recurring", "one_off"] = "recurring"
    sub_categories: List["CategorySchema"] = []


class EarnerSchema(BaseModel):
    name: str = ""
    salary: int = Field(0, ge=0)
    government_benefit: int = Field(0, ge=0)
    child_benefit: int = Field(0, ge=0)


class HolidaySchema(BaseModel):
    date: datetime.date
    name: str
    source: str = "custom"


class MonthUpdateRequest(BaseModel):
    """Request body for PUT /v1/months/{month_key}"""

    earner_a: EarnerSchema = EarnerSchema()
    earner_b: EarnerSchema = EarnerSchema()
    shared_costs: List[CategorySchema] = []
    shared_savings: List[CategorySchema] = []
    personal_costs_a: List[CategorySchema] = []
    personal_savings_a: List[CategorySchema] = []
    personal_costs_b: List[CategorySchema] = []
    personal_savings_b: List[CategorySchema] = []
    daily_rate: int = Field(0, ge=0, description="Weekday transfer in öre")
    friday_rate: int = Field(0, ge=0, description="Extra Friday transfer in öre")
    custom_holidays: List[HolidaySchema] = []


class BalanceRequest(BaseModel):
    """Request body for PUT /v1/months/{month_key}/balances/{account}"""

    amount: int = Field(..., description="Actual starting balance in öre")


class CalculationResultSchema(BaseModel):
    total_income: int
    total_daily_budget: int
    remaining_daily_budget: int
    holiday_budget: int
    balance_left: int
    earner_a_share: int
    earner_b_share: int
    earner_a_percent: float
    earner_b_percent: float
    days_until_pay_date: int
    weekday_count: int
    friday_count: int
    total_expenses: int
    remaining_weekday_count: int
    remaining_friday_count: int
    earner_a_personal_costs: int
    earner_a_personal_savings: int
    earner_b_personal_costs: int
    earner_b_personal_savings: int
    holidays_in_period: List[HolidaySchema]
    warnings: List[str]
    is_balanced: bool


class AccountReportSchema(BaseModel):
    account: str
    starting_balance: int
    starting_balance_is_actual: bool
    estimated_starting_balance: int
    estimate_available: bool
    estimate_source: str
    final_balance: Optional[int] = None
    estimated_final_balance: Optional[int] = None


class MonthResponse(BaseModel):
    """Response for GET/PUT /v1/months/{month_key}"""

    month_key: str
    period_start: datetime.date
    period_end: datetime.date
    result: CalculationResultSchema
    accounts: List[AccountReportSchema]


class MonthListResponse(BaseModel):
    months: List[str]


class HolidayListResponse(BaseModel):
    holidays: List[HolidaySchema]


class PrognosisEntry(BaseModel):
    month_key: str
    account: str
    starting_balance: int
    final_balance: int


class PrognosisResponse(BaseModel):
    entries: List[PrognosisEntry]
