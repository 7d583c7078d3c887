import math
from dataclasses import dataclass, field
from typing import List, Optional

from networth.equity import DEFAULT_FX_RATE, EquityCompanyConfig
from networth.household import BudgetSummary, Expense, PropertyConfig

# Simulated month 0 is January of this year
SIMULATION_START_YEAR = 2026

# Property value growth, compounded monthly
PROPERTY_APPRECIATION_RATE = 0.02

# Age at which the remaining pension is converted to an annuity (once retired)
ANNUITY_AGE = 60

# Snapshot cadence: every month for the first 3 years, then quarterly
DENSE_SNAPSHOT_MONTHS = 36
SNAPSHOT_EVERY_MONTHS = 3

INCOME_SOURCE_FULL_SALARY = "Full salary"
INCOME_SOURCE_HALF_WORK = "Half-time work"
INCOME_SOURCE_INVESTMENTS = "Investment withdrawal"
INCOME_SOURCE_ANNUITY = "Pension annuity"
INCOME_SOURCE_ANNUITY_AND_INVESTMENTS = "Annuity + investments"

EVENT_PROPERTY_PURCHASE = "Property purchase"
EVENT_ANNUITY_CONVERSION = "Pension annuity conversion"


@dataclass
class SimulationParams:
    """Bundles all simulation inputs. Rates are annual percentages (6 means 6%)."""
    investment_initial_value: float
    pension_initial_value: float
    return_rate: float
    inflation_rate: float
    transition_to_half_work_year: float
    stop_work_year: float
    budget_summary: BudgetSummary
    initial_age: float
    end_of_life_age: float
    monthly_expenses: List[Expense] = field(default_factory=list)
    yearly_expenses: List[Expense] = field(default_factory=list)
    property_config: Optional[PropertyConfig] = None
    equity_companies: List[EquityCompanyConfig] = field(default_factory=list)
    start_year: int = SIMULATION_START_YEAR
    fx_rate: float = DEFAULT_FX_RATE
    property_appreciation_rate: float = PROPERTY_APPRECIATION_RATE

    @property
    def horizon_months(self) -> float:
        """Months from initial age to end of life, possibly fractional."""
        return (self.end_of_life_age - self.initial_age) * 12

    @property
    def total_months(self) -> int:
        """Index of the last simulated month."""
        return max(0, math.floor(self.horizon_months))


@dataclass(frozen=True)
class SimulationDataPoint:
    """One snapshot of the household. Money fields are rounded to whole units."""
    index: int
    label: str
    full_age: float
    total_legacy: int
    liquid_wealth: int
    investments: int
    pension: int
    property: int
    monthly_outflow: int
    monthly_savings: int
    current_income: int
    income_source: str
    early_tax_penalty: int
    event: Optional[str]
    withdrawal_from_investments: int
    withdrawal_from_pension: int
    pension_annuity: int
    tax_paid: int


@dataclass
class MonthState:
    """Tracks mutable cash flow values for a single simulated month."""
    index: int
    calendar_year: int
    calendar_month: int
    years_passed: float
    age: float
    events: List[str] = field(default_factory=list)
    income: float = 0.0
    income_source: str = INCOME_SOURCE_FULL_SALARY
    outflow: float = 0.0
    savings: float = 0.0
    tax_paid: float = 0.0
    withdrawal_from_investments: float = 0.0
    withdrawal_from_pension: float = 0.0
    pension_annuity: float = 0.0
