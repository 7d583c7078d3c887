from networth.household import BudgetSummary, Expense
from networth.simulation import SimulationParams


def make_params(**overrides) -> SimulationParams:
    """3M household at 34: full work for 5 years, half work until 15."""
    values = dict(
        investment_initial_value=1500000,
        pension_initial_value=1500000,
        return_rate=6,
        inflation_rate=2.5,
        transition_to_half_work_year=5,
        stop_work_year=15,
        budget_summary=BudgetSummary(total_expense_today=35000, total_income_net=61500, total_pension_inflow=22800),
        monthly_expenses=[Expense(1, "Rent", 12000), Expense(2, "Other", 23000)],
        yearly_expenses=[],
        property_config=None,
        equity_companies=[],
        initial_age=34,
        end_of_life_age=90,
    )
    values.update(overrides)
    return SimulationParams(**values)


def flat_params(**overrides) -> SimulationParams:
    """No growth, no inflation, no salary: makes cash flows easy to follow."""
    values = dict(
        investment_initial_value=0,
        pension_initial_value=0,
        return_rate=0,
        inflation_rate=0,
        transition_to_half_work_year=0,
        stop_work_year=0,
        budget_summary=BudgetSummary(total_expense_today=0, total_income_net=0, total_pension_inflow=0),
        initial_age=40,
        end_of_life_age=45,
    )
    values.update(overrides)
    return SimulationParams(**values)
