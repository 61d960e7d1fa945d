from typing import Optional

from fastapi import APIRouter, Depends

from apps.backend.services.source import DEFAULT_PEER_LIMIT, EmissionsSource, current_year
from .deps import get_source, int_param
from .schemas import CompaniesResponse, CompanyDetailResponse, ErrorResponse, PeersResponse, SearchResponse

router = APIRouter(prefix="/api", tags=["companies"])


@router.get("/companies", response_model=CompaniesResponse)
def list_companies(source: EmissionsSource = Depends(get_source)):
    companies = source.list_companies()
    return {"success": True, "count": len(companies), "companies": companies}


# peers 먼저 등록: {name:path}가 "/peers"까지 삼키지 않도록
@router.get("/companies/{name:path}/peers", response_model=PeersResponse, responses={404: {"model": ErrorResponse}})
def company_peers(
    name: str,
    limit: Optional[str] = None,
    year: Optional[str] = None,
    seed: Optional[str] = None,
    source: EmissionsSource = Depends(get_source),
):
    result = source.get_peers(
        name,
        limit=int_param(limit, "limit", DEFAULT_PEER_LIMIT),
        year=int_param(year, "year", current_year()),
        seed=int_param(seed, "seed", None),
    )
    return {"success": True, **result}


@router.get("/companies/{name:path}", response_model=CompanyDetailResponse, responses={404: {"model": ErrorResponse}})
def company_detail(name: str, source: EmissionsSource = Depends(get_source)):
    return {"success": True, **source.get_company(name)}


@router.get("/search", response_model=SearchResponse)
def search(
    q: Optional[str] = None,
    sector: Optional[str] = None,
    region: Optional[str] = None,
    source: EmissionsSource = Depends(get_source),
):
    companies = source.search(q=q, sector=sector, region=region)
    return {"success": True, "count": len(companies), "companies": companies}
