import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.backend.services.errors import EmissionsError

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = {
    "success": False,
    "error": "Not found",
    "message": "The requested endpoint does not exist",
}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(EmissionsError)
    async def emissions_error(request: Request, exc: EmissionsError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # 경로는 있어도 메서드가 안 맞으면(405) 똑같이 "없는 엔드포인트"
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=NOT_FOUND_BODY)
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})
