"""
Anonymised sample household, used as the starting state for a new plan.

`build_simulation_params` turns household inputs into a SimulationParams
bundle: pension assets seed the pension balance, everything else is
investable, and a disabled property plan means no purchase at all.
"""
from typing import List, Optional

from networth.equity import EquityCompanyConfig, EquityContract
from networth.household import (
    Asset,
    Expense,
    PropertyConfig,
    SalaryData,
    calculate_budget_summary,
    calculate_investment_value,
    calculate_pension_value,
)
from networth.simulation import SimulationParams

DEFAULT_INITIAL_AGE = 35
END_OF_LIFE_AGE = 90

# Annual percentages and phase transitions (years from start)
DEFAULT_RATES = {
    "return_rate": 6.0,
    "inflation_rate": 2.5,
    "transition_to_half_work_year": 5,
    "stop_work_year": 15
}

DEFAULT_ASSETS = [
    Asset(id=1, name="Pension & provident funds", value=1500000, type="pension"),
    Asset(id=2, name="Study funds", value=350000, type="liquid"),
    Asset(id=3, name="Brokerage (person 1)", value=800000, type="liquid"),
    Asset(id=4, name="Brokerage (person 2)", value=400000, type="liquid"),
    Asset(id=5, name="Joint brokerage", value=600000, type="liquid"),
    Asset(id=6, name="Investment property share", value=300000, type="invest"),
    Asset(id=7, name="Checking & cash", value=50000, type="liquid"),
]

RENT_EXPENSE_ID = 1

DEFAULT_MONTHLY_EXPENSES = [
    Expense(id=RENT_EXPENSE_ID, name="Rent", amount=8000),
    Expense(id=2, name="Groceries", amount=4000),
    Expense(id=3, name="Utilities", amount=800),
    Expense(id=4, name="Building fees & municipal tax", amount=700),
    Expense(id=5, name="Insurance", amount=1200),
    Expense(id=6, name="Transport & fuel", amount=1500),
    Expense(id=7, name="Phone & internet", amount=400),
    Expense(id=8, name="Dining & entertainment", amount=2000),
    Expense(id=9, name="Clothing & shopping", amount=1000),
    Expense(id=10, name="Classes & sport", amount=800),
    Expense(id=11, name="Medical", amount=500),
    Expense(id=12, name="Misc", amount=1000),
]

DEFAULT_YEARLY_EXPENSES = [
    Expense(id=101, name="Car insurance", amount=5000),
    Expense(id=102, name="Car maintenance", amount=3000),
    Expense(id=103, name="Vacations", amount=30000),
    Expense(id=104, name="Gifts & holidays", amount=5000),
    Expense(id=105, name="Furniture & renovation", amount=10000),
]

DEFAULT_SALARY = SalaryData(person1_gross=40000, person1_net=25000, person2_gross=20000, person2_net=15000)

DEFAULT_EQUITY_COMPANIES = [
    EquityCompanyConfig(
        id="company-1",
        name="DataForge",
        contracts=[
            EquityContract("Initial Grant", 100000, 1.5, "2023-06-01", 4, 12),
            EquityContract("Refresher 2024", 50000, 3.0, "2024-06-01", 4, 0),
        ],
        exit_year=2028,
        share_price_at_exit=15
    ),
    EquityCompanyConfig(
        id="company-2",
        name="Nexus AI",
        contracts=[
            EquityContract("Base Grant", 10000, 0.5, "2023-01-01", 4, 12),
            EquityContract("Performance Grant", 10000, 5.0, "2024-01-01", 3, 0),
        ],
        exit_year=2029,
        share_price_at_exit=80
    ),
]

DEFAULT_PROPERTY = PropertyConfig(price=5000000, year=2030, monthly_savings=8000)


def build_simulation_params(
    assets: List[Asset],
    monthly_expenses: List[Expense],
    yearly_expenses: List[Expense],
    salary: SalaryData,
    equity_companies: List[EquityCompanyConfig],
    property_config: Optional[PropertyConfig],
    property_enabled: bool = True,
    initial_age: float = DEFAULT_INITIAL_AGE,
    end_of_life_age: float = END_OF_LIFE_AGE,
    return_rate: float = DEFAULT_RATES["return_rate"],
    inflation_rate: float = DEFAULT_RATES["inflation_rate"],
    transition_to_half_work_year: float = DEFAULT_RATES["transition_to_half_work_year"],
    stop_work_year: float = DEFAULT_RATES["stop_work_year"]
) -> SimulationParams:
    return SimulationParams(
        investment_initial_value=calculate_investment_value(assets),
        pension_initial_value=calculate_pension_value(assets),
        return_rate=return_rate,
        inflation_rate=inflation_rate,
        transition_to_half_work_year=transition_to_half_work_year,
        stop_work_year=stop_work_year,
        budget_summary=calculate_budget_summary(monthly_expenses, yearly_expenses, salary),
        initial_age=initial_age,
        end_of_life_age=end_of_life_age,
        monthly_expenses=list(monthly_expenses or []),
        yearly_expenses=list(yearly_expenses or []),
        property_config=property_config if property_enabled else None,
        equity_companies=list(equity_companies or [])
    )


def default_simulation_params() -> SimulationParams:
    """SimulationParams for the sample household."""
    return build_simulation_params(
        assets=DEFAULT_ASSETS,
        monthly_expenses=DEFAULT_MONTHLY_EXPENSES,
        yearly_expenses=DEFAULT_YEARLY_EXPENSES,
        salary=DEFAULT_SALARY,
        equity_companies=DEFAULT_EQUITY_COMPANIES,
        property_config=DEFAULT_PROPERTY
    )
