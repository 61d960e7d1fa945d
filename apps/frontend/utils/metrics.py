"""Client-side arithmetic for the dashboard views (percentages, net-zero path)."""
from typing import Dict, List, Optional


def calculate_net_zero_path(baseline_year: int, baseline_emissions: float, target_year: int) -> List[Dict]:
    """
    Straight-line trajectory from the baseline total down to zero at the
    net-zero year, one point per year, never below zero.
    """
    if target_year <= baseline_year:
        return [{"year": baseline_year, "target": 0.0}]

    yearly_reduction = baseline_emissions / (target_year - baseline_year)
    return [
        {"year": y, "target": max(0.0, baseline_emissions - yearly_reduction * (y - baseline_year))}
        for y in range(baseline_year, target_year + 1)
    ]


def format_emissions_for_chart(emissions: List[Dict], net_zero_path: List[Dict]) -> List[Dict]:
    targets = {p["year"]: p["target"] for p in net_zero_path}
    return [{**e, "target": targets.get(e["year"])} for e in emissions]


def calculate_yoy_change(current: float, previous: Optional[float]) -> Optional[float]:
    if not previous:
        return None
    return round((current - previous) / previous * 100, 1)


def calculate_reduction(baseline: Optional[float], current: float) -> float:
    if not baseline:
        return 0.0
    return round((baseline - current) / baseline * 100, 1)


def share_of_total(value: float, total: float) -> float:
    if not total:
        return 0.0
    return round(value / total * 100, 1)


def scope_breakdown(rollups: List[Dict]) -> List[Dict]:
    """Scope 1/2/3 sums across sector (or region) rollups, with % of the grand total."""
    total = sum(r["total_emissions"] for r in rollups)
    out = []
    for label, key in (("Scope 1", "total_scope_1"), ("Scope 2", "total_scope_2"), ("Scope 3", "total_scope_3")):
        value = sum(r[key] for r in rollups)
        out.append({"name": label, "value": value, "percentage": share_of_total(value, total)})
    return out
