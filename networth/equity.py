from dataclasses import dataclass, field
from datetime import date
from typing import List, Union

import pandas as pd

from networth.tax import calculate_net_equity, round_half_up

# USD -> ILS multiplier applied to share value and cost basis at cash-out
DEFAULT_FX_RATE = 3.5

DateLike = Union[date, str, pd.Timestamp]


def _to_date(value: DateLike) -> date:
    if type(value) is date:
        return value
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid date: {value!r}") from e
    if pd.isna(ts):
        raise ValueError(f"Invalid date: {value!r}")
    return ts.date()


@dataclass(frozen=True)
class EquityContract:
    """A single vesting grant. Vests linearly over period_years after the cliff."""
    name: str
    shares: float
    strike: float
    start_date: date
    period_years: float
    cliff_months: int = 0

    def __post_init__(self):
        object.__setattr__(self, "start_date", _to_date(self.start_date))
        if self.period_years <= 0:
            raise ValueError(f"Contract '{self.name}' must vest over a positive period")


@dataclass
class EquityCompanyConfig:
    id: str
    name: str
    contracts: List[EquityContract] = field(default_factory=list)
    exit_year: int = 0
    share_price_at_exit: float = 0.0

    @property
    def total_shares(self) -> float:
        return sum(c.shares for c in self.contracts)


@dataclass(frozen=True)
class VestingDetail:
    name: str
    vested: int
    cost: int


@dataclass(frozen=True)
class VestingResult:
    total_vested: float
    total_cost: float
    details: List[VestingDetail]


@dataclass(frozen=True)
class ExitProjection:
    vested_shares: float
    cost_basis: float
    gross_value: float
    profit: float
    net_value: int


def months_between(start: DateLike, target: DateLike) -> int:
    """Whole calendar months from start to target, ignoring the day of month."""
    start, target = _to_date(start), _to_date(target)
    return (target.year - start.year) * 12 + (target.month - start.month)


def get_vesting_at_date(contracts: List[EquityContract], target_date: DateLike) -> VestingResult:
    """
    Vested shares and cost basis across contracts at target_date.

    Nothing vests before the cliff. After it, vesting is linear from the
    start date and capped at the full grant.
    """
    total_vested = 0.0
    total_cost = 0.0
    details = []

    for contract in contracts or []:
        elapsed = months_between(contract.start_date, target_date)
        total_months = contract.period_years * 12

        vested = 0.0
        if elapsed >= (contract.cliff_months or 0):
            vested = min(contract.shares, max(0.0, (elapsed / total_months) * contract.shares))

        total_vested += vested
        total_cost += vested * contract.strike

        details.append(VestingDetail(
            name=contract.name,
            vested=round_half_up(vested),
            cost=round_half_up(vested * contract.strike)
        ))

    return VestingResult(total_vested=total_vested, total_cost=total_cost, details=details)


def project_exit(company: EquityCompanyConfig, fx_rate: float = DEFAULT_FX_RATE) -> ExitProjection:
    """
    Estimated proceeds of shares vested by January 1st of the exit year.
    """
    vesting = get_vesting_at_date(company.contracts, date(company.exit_year, 1, 1))
    gross_value = vesting.total_vested * company.share_price_at_exit * fx_rate
    cost_basis = vesting.total_cost * fx_rate
    profit = gross_value - cost_basis

    return ExitProjection(
        vested_shares=vesting.total_vested,
        cost_basis=cost_basis,
        gross_value=gross_value,
        profit=profit,
        net_value=calculate_net_equity(profit)
    )


def vesting_timeline(contracts: List[EquityContract], start_year: int = 2026, months: int = 60) -> pd.DataFrame:
    """
    Month-by-month vested shares and cost, starting January of start_year.
    Columns: 'Label', 'Vested', 'Cost' plus one column per contract.
    """
    dates = pd.date_range(start=f"{start_year}-01-01", periods=months + 1, freq="MS")
    rows = []

    for i, ts in enumerate(dates):
        vesting = get_vesting_at_date(contracts, ts.date())
        row = {
            "Month": i,
            "Label": f"{ts.month}/{ts.year}",
            "Vested": vesting.total_vested,
            "Cost": vesting.total_cost
        }
        for detail in vesting.details:
            row[detail.name] = detail.vested
        rows.append(row)

    return pd.DataFrame(rows).set_index("Month")
