import logging
from datetime import date
from typing import Dict, List

from networth import tax, tax_rules
from networth.equity import EquityCompanyConfig, get_vesting_at_date
from networth.household import (
    calculate_monthly_expense_base,
    calculate_monthly_inflation,
    calculate_monthly_return,
    safe_float,
)
from networth.simulation.models import (
    ANNUITY_AGE,
    DENSE_SNAPSHOT_MONTHS,
    EVENT_ANNUITY_CONVERSION,
    EVENT_PROPERTY_PURCHASE,
    INCOME_SOURCE_ANNUITY,
    INCOME_SOURCE_ANNUITY_AND_INVESTMENTS,
    INCOME_SOURCE_FULL_SALARY,
    INCOME_SOURCE_HALF_WORK,
    INCOME_SOURCE_INVESTMENTS,
    SNAPSHOT_EVERY_MONTHS,
    MonthState,
    SimulationDataPoint,
    SimulationParams,
)

logger = logging.getLogger(__name__)


class MonthlySimulator:
    """
    Advances a household's balances one month at a time.

    Phases follow elapsed time: full work, half work, then retirement. In
    retirement, withdrawals before age 60 come from investments first and then
    from the pension at non-employment marginal rates. From 60 the pension is
    converted once to an inflation-indexed annuity.

    Equity cash-outs and the property purchase are evaluated every month,
    independent of the phase. Balances may go negative; the loop always runs
    the full horizon so callers can judge solvency over the whole path.
    """

    def __init__(self, params: SimulationParams):
        self.params = params
        self.monthly_return = calculate_monthly_return(params.return_rate)
        self.monthly_inflation = calculate_monthly_inflation(params.inflation_rate)
        self.base_expenses = calculate_monthly_expense_base(params.monthly_expenses, params.yearly_expenses)
        self.total_months = params.total_months
        self._reset()

    def _reset(self) -> None:
        self.investments = safe_float(self.params.investment_initial_value)
        self.pension = safe_float(self.params.pension_initial_value)
        self.property_value = 0.0
        self.monthly_annuity = 0.0
        self.exited_companies = set()
        self.previous_vested: Dict[str, float] = {c.id: 0.0 for c in self.params.equity_companies or []}

    def run(self, target_withdrawal: float) -> List[SimulationDataPoint]:
        """
        Runs the full horizon for a constant (today's money) monthly withdrawal.
        Returns the snapshot trace in chronological order.
        """
        self._reset()
        trace = []

        for m in range(self.total_months + 1):
            state = self._new_month(m)

            for company in self.params.equity_companies or []:
                self._process_equity(company, state)

            owns_property = self._process_property(state)

            expense_base = self.base_expenses
            if owns_property:
                expense_base -= safe_float(self.params.property_config.monthly_savings)
            monthly_expenses = expense_base * self.monthly_inflation ** m
            state.outflow = monthly_expenses

            if state.years_passed < self.params.stop_work_year:
                self._working_month(state, monthly_expenses)
            else:
                desired = target_withdrawal * self.monthly_inflation ** m
                state.outflow = desired
                if state.age < ANNUITY_AGE:
                    self._early_retirement_month(state, desired)
                else:
                    self._annuity_month(state, desired)
                state.savings = state.income - state.outflow

            if m % SNAPSHOT_EVERY_MONTHS == 0 or m < DENSE_SNAPSHOT_MONTHS:
                trace.append(self._snapshot(state))

        return trace

    def _new_month(self, m: int) -> MonthState:
        years_passed = m / 12
        return MonthState(
            index=m,
            calendar_year=self.params.start_year + m // 12,
            calendar_month=m % 12 + 1,
            years_passed=years_passed,
            age=self.params.initial_age + years_passed
        )

    def _process_equity(self, company: EquityCompanyConfig, state: MonthState) -> None:
        """Lump-sum cash-out in January of the exit year, then newly vested shares monthly."""
        price = safe_float(company.share_price_at_exit)
        if not company.contracts or price <= 0:
            return

        fx = self.params.fx_rate
        vesting = get_vesting_at_date(company.contracts, date(state.calendar_year, state.calendar_month, 1))
        vested = vesting.total_vested

        if (state.calendar_year == company.exit_year and state.calendar_month == 1
                and company.id not in self.exited_companies):
            gross = vested * price * fx - vesting.total_cost * fx
            self.investments += tax.calculate_net_equity(gross)
            self.exited_companies.add(company.id)
            self.previous_vested[company.id] = vested
            state.events.append(f"{company.name} Exit")
            logger.debug("%s exit at month %d: %.0f shares vested", company.name, state.index, vested)

        elif company.id in self.exited_companies:
            newly_vested = vested - self.previous_vested[company.id]
            if newly_vested > 0:
                # Weighted average strike across all contracts, not per-lot
                avg_strike = vesting.total_cost / vested
                gross = newly_vested * price * fx - newly_vested * avg_strike * fx
                self.investments += tax.calculate_net_equity(gross)
                self.previous_vested[company.id] = vested

    def _process_property(self, state: MonthState) -> bool:
        """Handles purchase and appreciation. Returns whether the property is owned this month."""
        config = self.params.property_config
        if config is None or state.calendar_year < config.year:
            return False

        if state.calendar_year == config.year and state.calendar_month == 1:
            price = safe_float(config.price)
            self.investments -= price
            self.property_value = price
            state.events.append(EVENT_PROPERTY_PURCHASE)
            logger.debug("Property purchased at month %d for %.0f", state.index, price)
        else:
            self.property_value *= (1 + self.params.property_appreciation_rate) ** (1 / 12)
        return True

    def _working_month(self, state: MonthState, monthly_expenses: float) -> None:
        budget = self.params.budget_summary
        if state.years_passed < self.params.transition_to_half_work_year:
            state.income = safe_float(budget.total_income_net)
            state.income_source = INCOME_SOURCE_FULL_SALARY
            pension_inflow = safe_float(budget.total_pension_inflow) / 12
        else:
            # Half work breaks even with expenses
            state.income = monthly_expenses
            state.income_source = INCOME_SOURCE_HALF_WORK
            pension_inflow = safe_float(budget.total_pension_inflow) / 24

        self.pension = self.pension * (1 + self.monthly_return) + pension_inflow
        self.investments = self.investments * (1 + self.monthly_return) + state.income - monthly_expenses
        state.savings = state.income - monthly_expenses

    def _early_retirement_month(self, state: MonthState, desired: float) -> None:
        """
        Before 60: investments first (capital gains), then pension at
        non-employment marginal rates. Brackets are applied to annualised amounts.
        """
        self.investments *= (1 + self.monthly_return)
        self.pension *= (1 + self.monthly_return)
        annual_withdrawal = desired * 12

        if self.investments >= desired:
            state.withdrawal_from_investments = desired
            # Withdrawal is gross, tax is embedded in it
            state.tax_paid = tax.calculate_investment_withdrawal_tax(desired, annual_withdrawal)
            self.investments -= desired
            state.income_source = INCOME_SOURCE_INVESTMENTS
        else:
            from_investments = max(0.0, self.investments)
            investment_tax = tax.calculate_investment_withdrawal_tax(from_investments, annual_withdrawal)
            self.investments = 0.0

            shortfall = desired - from_investments
            monthly_gross = tax.gross_for_desired_net(shortfall * 12) / 12
            pension_tax = tax.calculate_early_pension_withdrawal(monthly_gross * 12)

            self.pension -= monthly_gross
            state.withdrawal_from_investments = from_investments
            state.withdrawal_from_pension = monthly_gross
            state.tax_paid = investment_tax + pension_tax.tax_paid / 12
            state.income_source = (
                f"Investments + pension (tax {tax.round_half_up(pension_tax.effective_rate * 100)}%)"
            )

        state.income = 0.0

    def _annuity_month(self, state: MonthState, desired: float) -> None:
        if self.pension > 0 and self.monthly_annuity == 0:
            gross_annuity = tax.calculate_pension_annuity(self.pension)
            self.monthly_annuity = gross_annuity - tax.calculate_pension_annuity_tax(gross_annuity)
            self.pension = 0.0
            state.events.append(EVENT_ANNUITY_CONVERSION)
            logger.debug("Pension converted at age %.1f: net annuity %.0f", state.age, self.monthly_annuity)

        # Annuity is indexed to inflation, not to investment return
        if state.index > 0:
            self.monthly_annuity *= self.monthly_inflation
        state.pension_annuity = self.monthly_annuity

        self.investments *= (1 + self.monthly_return)
        net_to_gross_tax = tax_rules.FIXED_PENSION_TAX / (1 - tax_rules.FIXED_PENSION_TAX)

        if desired <= self.monthly_annuity:
            state.income = self.monthly_annuity
            state.withdrawal_from_pension = self.monthly_annuity
            state.tax_paid = self.monthly_annuity * net_to_gross_tax
            state.income_source = INCOME_SOURCE_ANNUITY
            self.investments += self.monthly_annuity - desired
        else:
            gap = desired - self.monthly_annuity
            investment_tax = tax.calculate_investment_withdrawal_tax(gap, (self.monthly_annuity + gap) * 12)
            state.withdrawal_from_pension = self.monthly_annuity
            state.withdrawal_from_investments = gap
            state.tax_paid = self.monthly_annuity * net_to_gross_tax + investment_tax
            state.income = self.monthly_annuity
            state.income_source = INCOME_SOURCE_ANNUITY_AND_INVESTMENTS
            self.investments -= gap

    def _snapshot(self, state: MonthState) -> SimulationDataPoint:
        liquid_wealth = max(0.0, self.investments + self.pension)
        return SimulationDataPoint(
            index=state.index,
            label=f"{state.calendar_month}/{state.calendar_year}",
            full_age=tax.round_half_up(state.age * 10) / 10,
            total_legacy=tax.round_half_up(liquid_wealth + self.property_value),
            liquid_wealth=tax.round_half_up(liquid_wealth),
            investments=tax.round_half_up(max(0.0, self.investments)),
            pension=tax.round_half_up(max(0.0, self.pension)),
            property=tax.round_half_up(self.property_value),
            monthly_outflow=tax.round_half_up(state.outflow),
            monthly_savings=tax.round_half_up(state.savings),
            current_income=tax.round_half_up(state.income),
            income_source=state.income_source,
            early_tax_penalty=tax.round_half_up(state.tax_paid),
            event=" + ".join(state.events) if state.events else None,
            withdrawal_from_investments=tax.round_half_up(state.withdrawal_from_investments),
            withdrawal_from_pension=tax.round_half_up(state.withdrawal_from_pension),
            pension_annuity=tax.round_half_up(state.pension_annuity),
            tax_paid=tax.round_half_up(state.tax_paid)
        )


def run_simulation(target_withdrawal: float, params: SimulationParams) -> List[SimulationDataPoint]:
    """Convenience wrapper: one full-horizon run at the given monthly withdrawal."""
    return MonthlySimulator(params).run(target_withdrawal)
