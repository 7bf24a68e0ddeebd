import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from emma.api.router import api_router
from emma.core.config import settings
from emma.schemas.envelope import ErrorEnvelope

logger = logging.getLogger(__name__)

app = FastAPI(title="Emma API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorEnvelope(error=str(exc.detail)).model_dump(exclude_none=True),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ErrorEnvelope(error="Validation error", details=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump())


@app.exception_handler(Exception)
async def server_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorEnvelope(error="Internal server error").model_dump(exclude_none=True),
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
