"""Domain models - pure Python dataclasses representing budget entities

All money is an int amount in öre (1 kr = 100 öre).
"""

from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date
from enum import Enum
from typing import Dict, List, Optional

from household_budget.domain.exceptions import InvalidMonthKey

# Parsed keys keep two months back and one month ahead inside datetime.date
MIN_PARSED_YEAR = 2
MAX_PARSED_YEAR = 9998


@dataclass(frozen=True, order=True)
class MonthKey:
    """Calendar month identifier, ordered by (year, month)"""

    year: int
    month: int

    def __post_init__(self):
        if not isinstance(self.month, int) or not 1 <= self.month <= 12:
            raise InvalidMonthKey(f"Month must be between 1 and 12, got {self.month!r}")
        if not isinstance(self.year, int) or not MINYEAR <= self.year <= MAXYEAR:
            raise InvalidMonthKey(f"Year must be between {MINYEAR} and {MAXYEAR}, got {self.year!r}")

    @classmethod
    def parse(cls, value: str) -> "MonthKey":
        """Parse a "YYYY-MM" string"""
        try:
            year_part, month_part = value.split("-")
            year, month = int(year_part), int(month_part)
        except (AttributeError, ValueError) as e:
            raise InvalidMonthKey(f"Invalid month key: {value!r}") from e
        if not MIN_PARSED_YEAR <= year <= MAX_PARSED_YEAR:
            raise InvalidMonthKey(f"Year must be between {MIN_PARSED_YEAR} and {MAX_PARSED_YEAR}, got {year}")
        return cls(year, month)

    @classmethod
    def of(cls, day: date) -> "MonthKey":
        return cls(day.year, day.month)

    def previous(self) -> "MonthKey":
        if self.month == 1:
            return MonthKey(self.year - 1, 12)
        return MonthKey(self.year, self.month - 1)

    def next(self) -> "MonthKey":
        if self.month == 12:
            return MonthKey(self.year + 1, 1)
        return MonthKey(self.year, self.month + 1)

    def months_between(self, other: "MonthKey") -> int:
        """Absolute distance in months"""
        return abs((self.year * 12 + self.month) - (other.year * 12 + other.month))

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


class HolidaySource(str, Enum):
    FIXED = "fixed"
    EASTER_RELATIVE = "easter_relative"
    MOVING = "moving"  # midsummer eve, all saints' day
    CUSTOM = "custom"


@dataclass(frozen=True)
class Holiday:
    """Public or user-defined holiday"""

    date: date
    name: str
    source: HolidaySource = HolidaySource.CUSTOM


@dataclass(frozen=True)
class PayPeriodWindow:
    """Inclusive date range"""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Window start {self.start} is after end {self.end}")

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class DayClass:
    is_weekday: bool
    is_friday: bool
    is_holiday: bool

    @property
    def counts_toward_budget(self) -> bool:
        return self.is_weekday and not self.is_holiday


@dataclass(frozen=True)
class DayCounts:
    """Budget days within a window"""

    weekday_count: int
    friday_count: int


class CategoryType(str, Enum):
    COST = "cost"
    SAVINGS = "savings"


class Financing(str, Enum):
    RECURRING = "recurring"  # replenished by next month's cost budget
    ONE_OFF = "one_off"  # permanent withdrawal


@dataclass
class BudgetCategory:
    """Budget line, optionally grouping subcategories"""

    id: str
    name: str
    amount: int
    type: CategoryType
    account: Optional[str] = None
    financing: Financing = Financing.RECURRING
    sub_categories: List["BudgetCategory"] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Displayed total: cost groups sum their subcategories, savings use their own amount"""
        if self.type == CategoryType.COST and self.sub_categories:
            return sum(sub.amount for sub in self.sub_categories)
        return self.amount


@dataclass
class Earner:
    salary: int = 0
    government_benefit: int = 0
    child_benefit: int = 0
    name: str = ""

    @property
    def total_income(self) -> int:
        return self.salary + self.government_benefit + self.child_benefit


@dataclass
class AccountBalanceRecord:
    """Per-month balance state of one account"""

    starting_balance: int = 0
    starting_balance_is_actual: bool = False
    final_balance: Optional[int] = None  # computed, None until first reconciliation


class BudgetWarning(str, Enum):
    UNBALANCED = "unbalanced"


@dataclass
class Allocation:
    """Split of the shared pool between the two earners"""

    share_a: int
    share_b: int
    percent_a: float  # fraction of combined income, 0.0-1.0
    percent_b: float
    residual: int


@dataclass
class CalculationResult:
    """Derived month figures shown to the user"""

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
    remaining_weekday_count: int = 0
    remaining_friday_count: int = 0
    earner_a_personal_costs: int = 0
    earner_a_personal_savings: int = 0
    earner_b_personal_costs: int = 0
    earner_b_personal_savings: int = 0
    holidays_in_period: List[Holiday] = field(default_factory=list)
    warnings: List[BudgetWarning] = field(default_factory=list)

    @property
    def is_balanced(self) -> bool:
        return BudgetWarning.UNBALANCED not in self.warnings


@dataclass
class MonthSnapshot:
    """Full budget state of one month"""

    earner_a: Earner = field(default_factory=Earner)
    earner_b: Earner = field(default_factory=Earner)
    shared_costs: List[BudgetCategory] = field(default_factory=list)
    shared_savings: List[BudgetCategory] = field(default_factory=list)
    personal_costs_a: List[BudgetCategory] = field(default_factory=list)
    personal_savings_a: List[BudgetCategory] = field(default_factory=list)
    personal_costs_b: List[BudgetCategory] = field(default_factory=list)
    personal_savings_b: List[BudgetCategory] = field(default_factory=list)
    daily_rate: int = 0
    friday_rate: int = 0
    custom_holidays: List[Holiday] = field(default_factory=list)
    balances: Dict[str, AccountBalanceRecord] = field(default_factory=dict)
    last_result: Optional[CalculationResult] = None

    def all_categories(self) -> List[BudgetCategory]:
        """Shared and personal categories, the ledger used for account reconciliation"""
        return [
            *self.shared_costs,
            *self.shared_savings,
            *self.personal_costs_a,
            *self.personal_savings_a,
            *self.personal_costs_b,
            *self.personal_savings_b,
        ]

    def balance_for(self, account: str) -> AccountBalanceRecord:
        """Balance record for an account, created empty on first access"""
        return self.balances.setdefault(account, AccountBalanceRecord())


class EstimateSource(str, Enum):
    PREVIOUS_MONTH = "previous_month"  # recorded final balance of the month before
    RECONSTRUCTED = "reconstructed"  # previous month recomputed from its own start or two months back
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class BalanceEstimate:
    amount: int
    source: EstimateSource

    @property
    def available(self) -> bool:
        return self.source != EstimateSource.UNAVAILABLE


@dataclass
class AccountReport:
    """Per-account balance figures for one month"""

    account: str
    starting_balance: int
    starting_balance_is_actual: bool
    estimated_starting_balance: BalanceEstimate
    final_balance: Optional[int]  # None while the starting balance is unknown
    estimated_final_balance: Optional[int]
