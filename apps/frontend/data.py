from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache

from apps.backend.services.factory import build_source


@lru_cache(maxsize=1)
def get_source():
    return build_source()


def load_rollups(year: int):
    # sector/region 집계는 서로 독립 -> 동시에 조회
    source = get_source()
    with ThreadPoolExecutor(max_workers=2) as pool:
        sectors = pool.submit(source.get_sector_rollup, year)
        regions = pool.submit(source.get_region_rollup, year)
        return sectors.result(), regions.result()
