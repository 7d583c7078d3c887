from dataclasses import asdict
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from networth.simulation import SimulationDataPoint

TRACE_COLUMNS = list(SimulationDataPoint.__dataclass_fields__)


def trace_to_frame(trace: List[SimulationDataPoint]) -> pd.DataFrame:
    """
    Converts a snapshot trace into a DataFrame indexed by month index.
    """
    if not trace:
        return pd.DataFrame(columns=TRACE_COLUMNS).set_index("index")
    return pd.DataFrame([asdict(p) for p in trace]).set_index("index")


def summarize_trace(trace: List[SimulationDataPoint]) -> Dict[str, Any]:
    """
    Headline numbers for a projection:
    - final liquid wealth and total legacy (liquid + property)
    - peak liquid wealth
    - age at which liquid wealth first hits zero (None if never)
    - age at which the pension annuity starts (None if never)
    - every labelled event, in order
    """
    df = trace_to_frame(trace)
    if df.empty:
        return {}

    liquid = df["liquid_wealth"].to_numpy()
    depleted = np.flatnonzero(liquid <= 0)
    annuity = np.flatnonzero(df["pension_annuity"].to_numpy() > 0)

    return {
        "final_liquid_wealth": int(liquid[-1]),
        "final_total_legacy": int(df["total_legacy"].iloc[-1]),
        "peak_liquid_wealth": int(liquid.max()),
        "first_depleted_age": float(df["full_age"].iloc[depleted[0]]) if depleted.size else None,
        "annuity_start_age": float(df["full_age"].iloc[annuity[0]]) if annuity.size else None,
        "events": [f"{p.label}: {p.event}" for p in trace if p.event]
    }


def phase_breakdown(trace: List[SimulationDataPoint]) -> pd.DataFrame:
    """
    Groups snapshots by income source (phases show up in chronological order).
    Returns first/last age, snapshot count and average monthly tax per source.
    """
    df = trace_to_frame(trace)
    if df.empty:
        return pd.DataFrame()

    grouped = df.groupby("income_source", sort=False).agg(
        start_age=("full_age", "min"),
        end_age=("full_age", "max"),
        snapshots=("full_age", "size"),
        avg_tax_paid=("tax_paid", "mean")
    )
    return grouped.sort_values("start_age")
