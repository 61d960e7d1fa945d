from typing import Optional

from fastapi import APIRouter, Depends

from apps.backend.services.source import EmissionsSource, current_year
from .deps import get_source, int_param
from .schemas import RegionsResponse, SectorsResponse, StatsResponse, YearsResponse

router = APIRouter(prefix="/api", tags=["aggregates"])


@router.get("/sectors", response_model=SectorsResponse)
def sectors(year: Optional[str] = None, source: EmissionsSource = Depends(get_source)):
    y = int_param(year, "year", current_year())
    return {"success": True, "year": y, "sectors": source.get_sector_rollup(y)}


@router.get("/regions", response_model=RegionsResponse)
def regions(year: Optional[str] = None, source: EmissionsSource = Depends(get_source)):
    y = int_param(year, "year", current_year())
    return {"success": True, "year": y, "regions": source.get_region_rollup(y)}


@router.get("/years", response_model=YearsResponse)
def years(source: EmissionsSource = Depends(get_source)):
    return {"success": True, "years": source.list_years()}


@router.get("/stats", response_model=StatsResponse)
def stats(source: EmissionsSource = Depends(get_source)):
    return {"success": True, "stats": source.get_stats()}
