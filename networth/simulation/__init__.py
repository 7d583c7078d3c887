"""
Monthly household simulation package.

This package advances a household's investment, pension and property
balances month by month through work, half-work and retirement, with
equity cash-outs, a property purchase and Israeli pension/capital gains
taxation along the way.

All public classes are re-exported here.
"""

# Models
from networth.simulation.models import (
    SimulationParams,
    SimulationDataPoint,
    MonthState,
    SIMULATION_START_YEAR,
    PROPERTY_APPRECIATION_RATE,
    ANNUITY_AGE,
)

# Engine
from networth.simulation.engine import (
    MonthlySimulator,
    run_simulation,
)

__all__ = [
    # Models
    "SimulationParams",
    "SimulationDataPoint",
    "MonthState",
    "SIMULATION_START_YEAR",
    "PROPERTY_APPRECIATION_RATE",
    "ANNUITY_AGE",
    # Engine
    "MonthlySimulator",
    "run_simulation",
]
