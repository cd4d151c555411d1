"""Conversion between MonthSnapshot and its JSON payload"""

from datetime import date
from typing import Any, Dict, List, Optional

from household_budget.domain.exceptions import InvalidCategoryData
from household_budget.domain.models import (
    AccountBalanceRecord,
    BudgetCategory,
    BudgetWarning,
    CalculationResult,
    CategoryType,
    Earner,
    Financing,
    Holiday,
    HolidaySource,
    MonthSnapshot,
)

CATEGORY_LISTS = [
    "shared_costs",
    "shared_savings",
    "personal_costs_a",
    "personal_savings_a",
    "personal_costs_b",
    "personal_savings_b",
]


def category_to_dict(category: BudgetCategory) -> Dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "amount": category.amount,
        "type": category.type.value,
        "account": category.account,
        "financing": category.financing.value,
        "sub_categories": [category_to_dict(sub) for sub in category.sub_categories],
    }


def category_from_dict(data: Dict[str, Any], parent_type: Optional[CategoryType] = None) -> BudgetCategory:
    """
    Parse a category. Subcategories may omit `type` and inherit the parent's,
    but may not declare a different one; a missing `financing` means recurring.

    Raises:
        InvalidCategoryData: On missing fields, unknown type/financing values or
            a subcategory whose type differs from its group
    """
    try:
        raw_type = data.get("type") or (parent_type.value if parent_type else None)
        if raw_type is None:
            raise KeyError("type")
        category_type = CategoryType(raw_type)
        if parent_type is not None and category_type != parent_type:
            raise InvalidCategoryData(
                f"Subcategory {data.get('id')!r} is {category_type.value}, its group is {parent_type.value}"
            )
        return BudgetCategory(
            id=str(data["id"]),
            name=data["name"],
            amount=int(data["amount"]),
            type=category_type,
            account=data.get("account"),
            financing=Financing(data.get("financing") or Financing.RECURRING.value),
            sub_categories=[
                category_from_dict(sub, category_type) for sub in data.get("sub_categories") or []
            ],
        )
    except KeyError as e:
        raise InvalidCategoryData(f"Category is missing required field {e}") from e
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidCategoryData(f"Invalid category data: {e}") from e


def holiday_to_dict(holiday: Holiday) -> Dict[str, Any]:
    return {"date": holiday.date.isoformat(), "name": holiday.name, "source": holiday.source.value}


def holiday_from_dict(data: Dict[str, Any]) -> Holiday:
    try:
        return Holiday(
            date=date.fromisoformat(data["date"]),
            name=data["name"],
            source=HolidaySource(data.get("source", HolidaySource.CUSTOM.value)),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidCategoryData(f"Invalid holiday data: {e}") from e


def _earner_to_dict(earner: Earner) -> Dict[str, Any]:
    return {
        "name": earner.name,
        "salary": earner.salary,
        "government_benefit": earner.government_benefit,
        "child_benefit": earner.child_benefit,
    }


def _earner_from_dict(data: Dict[str, Any]) -> Earner:
    return Earner(
        name=data.get("name", ""),
        salary=int(data.get("salary", 0)),
        government_benefit=int(data.get("government_benefit", 0)),
        child_benefit=int(data.get("child_benefit", 0)),
    )


def result_to_dict(result: CalculationResult) -> Dict[str, Any]:
    data = dict(vars(result))
    data["holidays_in_period"] = [holiday_to_dict(h) for h in result.holidays_in_period]
    data["warnings"] = [w.value for w in result.warnings]
    return data


def result_from_dict(data: Dict[str, Any]) -> CalculationResult:
    values = dict(data)
    values["holidays_in_period"] = [holiday_from_dict(h) for h in data.get("holidays_in_period", [])]
    values["warnings"] = [BudgetWarning(w) for w in data.get("warnings", [])]
    return CalculationResult(**values)


def snapshot_to_payload(snapshot: MonthSnapshot) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "earner_a": _earner_to_dict(snapshot.earner_a),
        "earner_b": _earner_to_dict(snapshot.earner_b),
        "daily_rate": snapshot.daily_rate,
        "friday_rate": snapshot.friday_rate,
        "custom_holidays": [holiday_to_dict(h) for h in snapshot.custom_holidays],
        "balances": {
            account: {
                "starting_balance": record.starting_balance,
                "starting_balance_is_actual": record.starting_balance_is_actual,
                "final_balance": record.final_balance,
            }
            for account, record in snapshot.balances.items()
        },
        "last_result": result_to_dict(snapshot.last_result) if snapshot.last_result else None,
    }
    for name in CATEGORY_LISTS:
        payload[name] = [category_to_dict(c) for c in getattr(snapshot, name)]
    return payload


def snapshot_from_payload(payload: Dict[str, Any]) -> MonthSnapshot:
    """
    Decode a stored payload.

    Raises:
        InvalidCategoryData: On malformed categories, holidays or numbers
    """
    try:
        return _decode_snapshot(payload)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidCategoryData(f"Invalid snapshot payload: {e}") from e


def _decode_snapshot(payload: Dict[str, Any]) -> MonthSnapshot:
    categories: Dict[str, List[BudgetCategory]] = {
        name: [category_from_dict(c) for c in payload.get(name, [])] for name in CATEGORY_LISTS
    }
    last_result = payload.get("last_result")

    return MonthSnapshot(
        earner_a=_earner_from_dict(payload.get("earner_a", {})),
        earner_b=_earner_from_dict(payload.get("earner_b", {})),
        daily_rate=int(payload.get("daily_rate", 0)),
        friday_rate=int(payload.get("friday_rate", 0)),
        custom_holidays=[holiday_from_dict(h) for h in payload.get("custom_holidays", [])],
        balances={
            account: AccountBalanceRecord(
                starting_balance=int(record.get("starting_balance", 0)),
                starting_balance_is_actual=bool(record.get("starting_balance_is_actual", False)),
                final_balance=record.get("final_balance"),
            )
            for account, record in payload.get("balances", {}).items()
        },
        last_result=result_from_dict(last_result) if last_result else None,
        **categories,
    )
