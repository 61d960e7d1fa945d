from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.backend.api.errors import register_error_handlers
from apps.backend.api.routers_aggregates import router as aggregates_router
from apps.backend.api.routers_companies import router as companies_router
from apps.backend.api.routers_health import router as health_router
from apps.backend.services.source import EmissionsSource
from apps.backend.utils.config import API_NAME, API_VERSION, CORS_ORIGINS
from apps.backend.utils.logger import configure_logging


def create_app(source: Optional[EmissionsSource] = None) -> FastAPI:
    configure_logging()

    app = FastAPI(title=API_NAME, version=API_VERSION)
    app.state.source = source

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )
    register_error_handlers(app)

    @app.get("/")
    def index():
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "endpoints": {
                "companies": "/api/companies",
                "company": "/api/companies/:name",
                "peers": "/api/companies/:name/peers",
                "sectors": "/api/sectors?year=2022",
                "regions": "/api/regions?year=2022",
                "search": "/api/search?q=&sector=&region=",
                "years": "/api/years",
                "stats": "/api/stats",
            },
        }

    app.include_router(health_router)
    app.include_router(companies_router)
    app.include_router(aggregates_router)
    return app


app = create_app()
