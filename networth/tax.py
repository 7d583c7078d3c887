import math
from dataclasses import dataclass
from typing import List, Tuple

import pandas as pd

from networth import tax_rules

Brackets = List[Tuple[float, float]]


@dataclass
class PensionWithdrawal:
    net_amount: float
    tax_paid: float
    effective_rate: float


def round_half_up(value: float) -> int:
    """Rounds to the nearest whole currency unit, halves going up."""
    return int(math.floor(value + 0.5))


def calculate_marginal_tax(amount: float, brackets: Brackets, existing_income: float = 0.0) -> float:
    """
    Calculates tax on `amount` using progressive brackets.

    `existing_income` is treated as having already filled the lower brackets,
    so only the marginal tax on the additional amount is returned.
    brackets: list of (up_to, rate) tuples, ascending.
    """
    if amount <= 0:
        return 0.0

    remaining = amount
    total_tax = 0.0
    current_threshold = existing_income

    for up_to, rate in brackets:
        if current_threshold >= up_to:
            continue

        taxable_in_bracket = min(remaining, up_to - current_threshold)
        if taxable_in_bracket <= 0:
            continue

        total_tax += taxable_in_bracket * rate
        remaining -= taxable_in_bracket
        current_threshold += taxable_in_bracket

        if remaining <= 0:
            break

    return total_tax


def calculate_effective_tax_rate(amount: float, brackets: Brackets, existing_income: float = 0.0) -> float:
    if amount <= 0:
        return 0.0
    return calculate_marginal_tax(amount, brackets, existing_income) / amount


def calculate_net_equity(gross_profit: float) -> int:
    """
    Net equity profit after capital gains tax.

    Uses marginal brackets: 25% base, 28% above the surtax threshold, 30% above 5M.
    Missing or non-positive profit yields 0.
    """
    if gross_profit is None or pd.isna(gross_profit) or gross_profit <= 0:
        return 0

    tax = calculate_marginal_tax(gross_profit, tax_rules.CAPITAL_GAINS_TAX_BRACKETS)
    return round_half_up(gross_profit - tax)


def calculate_capital_gains_effective_rate(amount: float) -> float:
    return calculate_effective_tax_rate(amount, tax_rules.CAPITAL_GAINS_TAX_BRACKETS)


def calculate_early_pension_withdrawal(gross_amount: float, existing_annual_income: float = 0.0) -> PensionWithdrawal:
    """
    Tax on pension withdrawn before age 60, taxed as non-employment income.

    Amounts are annual.
    """
    if gross_amount <= 0:
        return PensionWithdrawal(net_amount=0.0, tax_paid=0.0, effective_rate=0.0)

    tax_paid = calculate_marginal_tax(gross_amount, tax_rules.NON_EMPLOYMENT_TAX_BRACKETS, existing_annual_income)
    return PensionWithdrawal(
        net_amount=gross_amount - tax_paid,
        tax_paid=tax_paid,
        effective_rate=tax_paid / gross_amount
    )


def gross_for_desired_net(desired_net: float, existing_annual_income: float = 0.0) -> float:
    """
    Binary search for the gross early withdrawal that nets `desired_net`.

    Marginal rates make the inverse non-linear. The top rate is 52%, so the
    gross is bounded by 3x the net. Runs a fixed 50 iterations.
    """
    if desired_net <= 0:
        return 0.0

    low = desired_net
    high = desired_net * 3.0

    for _ in range(50):
        mid = (low + high) / 2.0
        result = calculate_early_pension_withdrawal(mid, existing_annual_income)

        if abs(result.net_amount - desired_net) < 1.0:
            return mid

        if result.net_amount < desired_net:
            low = mid
        else:
            high = mid

    return (low + high) / 2.0


def calculate_pension_annuity(pension_balance: float) -> float:
    """Monthly gross annuity from a pension balance (fixed coefficient method)."""
    if pension_balance <= 0:
        return 0.0
    return pension_balance / tax_rules.FIXED_COEFFICIENT


def calculate_pension_annuity_tax(monthly_annuity: float) -> float:
    if monthly_annuity <= 0:
        return 0.0
    return monthly_annuity * tax_rules.FIXED_PENSION_TAX


def calculate_investment_withdrawal_tax(amount: float, annual_income: float) -> float:
    """
    Capital gains tax on an investment withdrawal.
    The surtax applies to the whole amount once annual income crosses the threshold.
    """
    if amount <= 0:
        return 0.0

    tax = amount * tax_rules.CAPITAL_GAINS_BASE_RATE
    if annual_income > tax_rules.SURTAX_THRESHOLD:
        tax += amount * tax_rules.SURTAX_RATE
    return tax
