import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from apps.backend.services.errors import NotFoundError, ValidationError
from apps.backend.services.source import (
    COMPANY_COLUMNS,
    DEFAULT_PEER_LIMIT,
    SEARCH_LIMIT,
    Row,
    blank_to_none,
    build_peer_result,
    check_limit,
    current_year,
    summarize,
)
from apps.etl.csv_to_db.extract import extract_companies, extract_emissions, read_rows, to_records

logger = logging.getLogger(__name__)

EMISSION_COLUMNS = ["company", "year", "scope_1", "scope_2", "scope_3"]


class InMemoryEmissionsSource:
    """
    EmissionsSource over two DataFrames shaped like the companies and
    emissions tables (emissions reference companies by ``company`` name).

    Emission rows whose company is unknown are ignored, the same way the
    import's ``INSERT ... SELECT ... WHERE name = ...`` inserts nothing for them.
    """

    def __init__(self, companies: pd.DataFrame, emissions: pd.DataFrame, seed: Optional[int] = None):
        dup = emissions.duplicated(subset=["company", "year"])
        if dup.any():
            first = emissions[dup].iloc[0]
            raise ValidationError(
                f"Duplicate emission record for {first['company']!r} in {int(first['year'])}"
            )

        self.seed = seed
        self._companies = companies[COMPANY_COLUMNS].sort_values("name", kind="stable").reset_index(drop=True)

        facts = emissions[EMISSION_COLUMNS].merge(
            self._companies[["name", "sector", "region"]],
            left_on="company",
            right_on="name",
            how="inner",
        ).drop(columns="name")
        facts["total"] = facts["scope_1"] + facts["scope_2"].fillna(0) + facts["scope_3"]
        self._facts = facts

    @classmethod
    def from_csv(cls, csv_path, encoding: str = "utf-8", seed: Optional[int] = None) -> "InMemoryEmissionsSource":
        rows = read_rows(Path(csv_path), encoding=encoding)
        source = cls(extract_companies(rows), extract_emissions(rows), seed=seed)
        logger.info("Loaded %d companies / %d emission rows from %s",
                    len(source._companies), len(source._facts), csv_path)
        return source

    def _company(self, name: str) -> Row:
        match = self._companies[self._companies["name"] == name]
        if match.empty:
            raise NotFoundError("Company not found")
        return to_records(match.head(1))[0]

    def list_companies(self) -> List[Row]:
        per_company = self._facts.groupby("company").agg(
            emission_records=("year", "size"),
            first_year=("year", "min"),
            latest_year=("year", "max"),
        )
        merged = self._companies.merge(per_company, left_on="name", right_index=True, how="left")
        merged["emission_records"] = merged["emission_records"].fillna(0).astype("int64")
        merged["first_year"] = merged["first_year"].astype("Int64")
        merged["latest_year"] = merged["latest_year"].astype("Int64")
        return to_records(merged)

    def get_company(self, name: str) -> Row:
        company = self._company(name)
        rows = self._facts[self._facts["company"] == name].sort_values("year")
        emissions = to_records(rows[["year", "scope_1", "scope_2", "scope_3", "total"]])
        return {
            "company": company,
            "emissions": emissions,
            "summary": summarize(company, emissions),
        }

    def get_peers(self, name, limit=DEFAULT_PEER_LIMIT, year=None, seed=None) -> Row:
        year = current_year() if year is None else year
        seed = self.seed if seed is None else seed

        company = self._company(name)
        check_limit(limit)
        f = self._facts
        same = f[(f["sector"] == company["sector"]) & (f["year"] == year)]
        rows = to_records(
            same.rename(columns={"company": "name", "total": "total_emissions"})
            [["name", "sector", "region", "total_emissions"]]
        )
        return build_peer_result(name, company["sector"], year, rows, limit, seed)

    def get_sector_rollup(self, year: int) -> List[Row]:
        return self._rollup("sector", year)

    def get_region_rollup(self, year: int) -> List[Row]:
        return self._rollup("region", year)

    def _rollup(self, key: str, year: int) -> List[Row]:
        facts = self._facts[self._facts["year"] == year]
        facts = facts.assign(scope_2=facts["scope_2"].fillna(0))
        grouped = facts.groupby(key).agg(
            company_count=("company", "nunique"),
            total_scope_1=("scope_1", "sum"),
            total_scope_2=("scope_2", "sum"),
            total_scope_3=("scope_3", "sum"),
            total_emissions=("total", "sum"),
            avg_emissions=("total", "mean"),
        ).reset_index()
        grouped = grouped.sort_values("total_emissions", ascending=False, kind="stable")
        return to_records(grouped)

    def search(self, q=None, sector=None, region=None) -> List[Row]:
        q, sector, region = blank_to_none(q), blank_to_none(sector), blank_to_none(region)

        c = self._companies
        mask = pd.Series(True, index=c.index)
        if q:
            mask &= c["name"].str.contains(q, regex=False)
        if sector:
            mask &= c["sector"] == sector
        if region:
            mask &= c["region"] == region
        return to_records(c[mask].head(SEARCH_LIMIT))

    def list_years(self) -> List[int]:
        return sorted({int(y) for y in self._facts["year"]}, reverse=True)

    def get_stats(self) -> Row:
        years = self._facts["year"]
        return {
            "total_companies": len(self._companies),
            "total_emissions_records": len(self._facts),
            "total_sectors": int(self._companies["sector"].nunique()),
            "total_regions": int(self._companies["region"].nunique()),
            "earliest_year": int(years.min()) if len(years) else None,
            "latest_year": int(years.max()) if len(years) else None,
        }

    def ping(self) -> bool:
        return True
