"""Data-access interface shared by the API and the dashboard.

Both adapters (``SqlEmissionsSource`` and ``InMemoryEmissionsSource``) return
plain dicts and lists so the routers and Streamlit pages never care which one
they were given.
"""
import random
from datetime import date
from typing import Any, Dict, List, Optional, Protocol

from apps.backend.services.errors import ValidationError

DEFAULT_PEER_LIMIT = 5
SEARCH_LIMIT = 50

COMPANY_COLUMNS = [
    "id",
    "name",
    "sector",
    "region",
    "ownership",
    "baseline_year",
    "net_zero_year",
    "interim_target_year",
    "interim_reduction_percent",
]

Row = Dict[str, Any]


class EmissionsSource(Protocol):
    def list_companies(self) -> List[Row]: ...

    def get_company(self, name: str) -> Row: ...

    def get_peers(
        self,
        name: str,
        limit: int = DEFAULT_PEER_LIMIT,
        year: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> Row: ...

    def get_sector_rollup(self, year: int) -> List[Row]: ...

    def get_region_rollup(self, year: int) -> List[Row]: ...

    def search(
        self,
        q: Optional[str] = None,
        sector: Optional[str] = None,
        region: Optional[str] = None,
    ) -> List[Row]: ...

    def list_years(self) -> List[int]: ...

    def get_stats(self) -> Row: ...

    def ping(self) -> bool: ...


def current_year() -> int:
    return date.today().year


def summarize(company: Row, emissions: List[Row]) -> Row:
    """Summary block for the company detail; emissions must be year-ordered."""
    baseline = next(
        (e["total"] for e in emissions if e["year"] == company["baseline_year"]),
        None,
    )
    return {
        "total_records": len(emissions),
        "baseline_emissions": baseline,
        "latest_emissions": emissions[-1]["total"] if emissions else None,
    }


def check_limit(limit: int) -> int:
    if limit < 0:
        raise ValidationError(f"limit must be a non-negative integer, got {limit}")
    return limit


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def sample_peers(candidates: List[Row], limit: int, seed: Optional[int] = None) -> List[Row]:
    """
    Pick up to ``limit`` peers at random.

    Candidates are ordered by name first so a given seed yields the same
    selection whichever adapter produced them. ``seed=None`` draws fresh
    entropy on every call.
    """
    ordered = sorted(candidates, key=lambda r: r["name"])
    if limit >= len(ordered):
        picked = ordered
        random.Random(seed).shuffle(picked)
        return picked
    return random.Random(seed).sample(ordered, limit)


def peer_entry(row: Row, year: int, is_current: bool) -> Row:
    return {
        "name": row["name"],
        "sector": row["sector"],
        "region": row["region"],
        "total_emissions": row["total_emissions"],
        "year": year,
        "is_current_company": is_current,
    }


def build_peer_result(
    name: str,
    sector: str,
    year: int,
    sector_rows: List[Row],
    limit: int,
    seed: Optional[int],
) -> Row:
    """
    Assemble the peers payload from every same-sector row for ``year``.

    The named company's own row (if any) goes first, flagged as current;
    the rest are sampled down to ``limit``.
    """
    own = [r for r in sector_rows if r["name"] == name]
    others = [r for r in sector_rows if r["name"] != name]

    companies = [peer_entry(r, year, True) for r in own[:1]]
    companies += [peer_entry(r, year, False) for r in sample_peers(others, limit, seed)]
    return {"year": year, "sector": sector, "companies": companies}
