from dataclasses import dataclass
from typing import Any, List, Optional

import pandas as pd

from networth import tax_rules
from networth.tax import round_half_up


@dataclass
class Asset:
    id: int
    name: str
    value: float
    type: str = "liquid"  # 'pension', 'liquid', 'invest'


@dataclass
class Expense:
    id: int
    name: str
    amount: float


@dataclass
class SalaryData:
    person1_gross: float = 0.0
    person1_net: float = 0.0
    person2_gross: float = 0.0
    person2_net: float = 0.0


@dataclass
class BudgetSummary:
    total_expense_today: float
    total_income_net: float
    total_pension_inflow: float


@dataclass
class PropertyConfig:
    """One-time purchase in January of `year`. `monthly_savings` is e.g. the rent no longer paid."""
    price: float
    year: int
    monthly_savings: float = 0.0


def safe_float(value: Any) -> float:
    """Coerces user-supplied numbers (possibly strings, None or NaN) to float, defaulting to 0."""
    if value is None:
        return 0.0
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number):
        return 0.0
    return float(number)


def _sum_amounts(expenses: Optional[List[Expense]]) -> float:
    return sum(safe_float(e.amount) for e in (expenses or []))


def calculate_monthly_expense_base(monthly_expenses: Optional[List[Expense]],
                                   yearly_expenses: Optional[List[Expense]]) -> float:
    """Monthly expenses plus yearly expenses spread over 12 months, in today's money."""
    return _sum_amounts(monthly_expenses) + _sum_amounts(yearly_expenses) / 12


def calculate_budget_summary(monthly_expenses: Optional[List[Expense]],
                             yearly_expenses: Optional[List[Expense]],
                             salary: SalaryData) -> BudgetSummary:
    total_gross = safe_float(salary.person1_gross) + safe_float(salary.person2_gross)
    return BudgetSummary(
        total_expense_today=round_half_up(calculate_monthly_expense_base(monthly_expenses, yearly_expenses)),
        total_income_net=safe_float(salary.person1_net) + safe_float(salary.person2_net),
        total_pension_inflow=total_gross * tax_rules.PENSION_CONTRIBUTION_RATE
    )


def calculate_total_assets(assets: Optional[List[Asset]]) -> int:
    return round_half_up(sum(safe_float(a.value) for a in (assets or [])))


def calculate_pension_value(assets: Optional[List[Asset]]) -> float:
    """Assets that seed the pension balance."""
    return sum(safe_float(a.value) for a in (assets or []) if a.type == "pension")


def calculate_investment_value(assets: Optional[List[Asset]]) -> float:
    """Everything that is not pension is investable."""
    return sum(safe_float(a.value) for a in (assets or []) if a.type != "pension")


def calculate_monthly_return(annual_rate_pct: float) -> float:
    """Monthly compounding rate for an annual percentage, e.g. 6 -> ~0.00487."""
    return (1 + annual_rate_pct / 100) ** (1 / 12) - 1


def calculate_monthly_inflation(annual_rate_pct: float) -> float:
    """Monthly inflation *factor* for an annual percentage, e.g. 2.5 -> ~1.00206."""
    return (1 + annual_rate_pct / 100) ** (1 / 12)
