import logging
from dataclasses import dataclass
from typing import List

from networth.simulation import MonthlySimulator, SimulationDataPoint, SimulationParams
from networth.tax import round_half_up

logger = logging.getLogger(__name__)

# Monthly withdrawal search bounds (today's money)
MIN_WITHDRAWAL = 5000
MAX_WITHDRAWAL = 500000
SEARCH_ITERATIONS = 30

# Final liquid wealth at or below this counts as running out
FINAL_WEALTH_FLOOR = 2000

# Depletion in the last months of the horizon is tolerated
END_GRACE_MONTHS = 12


@dataclass
class OptimalWithdrawal:
    value: int
    trace: List[SimulationDataPoint]


class WithdrawalSolver:
    """
    Finds the maximum sustainable monthly withdrawal for a household.

    Note: the binary search assumes solvency is monotonic in the withdrawal,
    i.e. a larger withdrawal never leaves the household better off. This holds
    for ordinary inputs but is not proven for every combination (for example a
    large property purchase funded from investments), so the result is an
    approximation rather than a guaranteed global optimum.
    """

    def __init__(self, params: SimulationParams):
        self.params = params
        self.simulator = MonthlySimulator(params)

    def is_sustainable(self, trace: List[SimulationDataPoint]) -> bool:
        """No depletion before the final year, and something left at the end."""
        cutoff = self.params.horizon_months - END_GRACE_MONTHS
        bankrupt = any(p.liquid_wealth <= 0 and p.index < cutoff for p in trace)
        depleted_at_end = trace[-1].liquid_wealth <= FINAL_WEALTH_FLOOR
        return not bankrupt and not depleted_at_end

    def solve_optimal_withdrawal(self) -> OptimalWithdrawal:
        low = MIN_WITHDRAWAL
        high = MAX_WITHDRAWAL
        best = 0.0

        for i in range(SEARCH_ITERATIONS):  # fixed count guarantees termination
            mid = (low + high) / 2
            sustainable = self.is_sustainable(self.simulator.run(mid))
            logger.debug("Iteration %d: withdrawal %.0f sustainable=%s", i, mid, sustainable)

            if sustainable:
                best = mid
                low = mid  # Try higher spending
            else:
                high = mid  # Household runs out

        if best == 0:
            logger.info("No sustainable withdrawal found between %d and %d", MIN_WITHDRAWAL, MAX_WITHDRAWAL)

        return OptimalWithdrawal(value=round_half_up(best), trace=self.simulator.run(best))


def find_optimal_withdrawal(params: SimulationParams) -> OptimalWithdrawal:
    return WithdrawalSolver(params).solve_optimal_withdrawal()
