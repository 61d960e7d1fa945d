"""Response models for the emissions API."""
from typing import List, Optional

from pydantic import BaseModel


class Company(BaseModel):
    id: Optional[int] = None
    name: str
    sector: str
    region: str
    ownership: str
    baseline_year: int
    net_zero_year: int
    interim_target_year: Optional[int] = None
    interim_reduction_percent: Optional[float] = None


class CompanyListing(Company):
    emission_records: int
    first_year: Optional[int] = None
    latest_year: Optional[int] = None


class EmissionRecord(BaseModel):
    year: int
    scope_1: float
    scope_2: Optional[float] = None
    scope_3: float
    total: float


class EmissionSummary(BaseModel):
    total_records: int
    baseline_emissions: Optional[float] = None
    latest_emissions: Optional[float] = None


class PeerEntry(BaseModel):
    name: str
    sector: str
    region: str
    total_emissions: float
    year: int
    is_current_company: bool


class Rollup(BaseModel):
    company_count: int
    total_scope_1: float
    total_scope_2: float
    total_scope_3: float
    total_emissions: float
    avg_emissions: float


class SectorRollup(Rollup):
    sector: str


class RegionRollup(Rollup):
    region: str


class Stats(BaseModel):
    total_companies: int
    total_emissions_records: int
    total_sectors: int
    total_regions: int
    earliest_year: Optional[int] = None
    latest_year: Optional[int] = None


class CompaniesResponse(BaseModel):
    success: bool = True
    count: int
    companies: List[CompanyListing]


class SearchResponse(BaseModel):
    success: bool = True
    count: int
    companies: List[Company]


class CompanyDetailResponse(BaseModel):
    success: bool = True
    company: Company
    emissions: List[EmissionRecord]
    summary: EmissionSummary


class PeersResponse(BaseModel):
    success: bool = True
    year: int
    sector: str
    companies: List[PeerEntry]


class SectorsResponse(BaseModel):
    success: bool = True
    year: int
    sectors: List[SectorRollup]


class RegionsResponse(BaseModel):
    success: bool = True
    year: int
    regions: List[RegionRollup]


class YearsResponse(BaseModel):
    success: bool = True
    years: List[int]


class StatsResponse(BaseModel):
    success: bool = True
    stats: Stats


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: Optional[str] = None
