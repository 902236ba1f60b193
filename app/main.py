import logging
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.api.router import router as api_router
from app.core.config import settings
from app.core.errors import AssetNotFoundError, InvalidRangeError, ScrapeError, SheetNotFoundError
from app.core.logging_utils import setup_logging
from app.core.rate_limiter import enforce_rate_limit
from app.core.security import BodySizeLimitMiddleware, SecurityHeadersMiddleware

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Radar Sebrae Scraper", dependencies=[Depends(enforce_rate_limit)])
# O último adicionado é o mais externo: cabeçalhos de segurança valem também para o 413
app.add_middleware(BodySizeLimitMiddleware)
app.add_middleware(SecurityHeadersMiddleware)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Requisição inválida"


# --- Global Exception Handlers ---

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _validation_message(exc)})


@app.exception_handler(ScrapeError)
async def scrape_exception_handler(request: Request, exc: ScrapeError):
    logger.error(f"❌ Scrape falhou em {request.url.path} após {exc.attempts} tentativa(s): {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(InvalidRangeError)
@app.exception_handler(SheetNotFoundError)
async def bad_request_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(AssetNotFoundError)
async def asset_not_found_handler(request: Request, exc: AssetNotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global Error: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal Server Error"})


# Raiz e health para evitar "Application loading" no provedor
@app.get("/", response_class=PlainTextResponse)
async def root():
    return "ok"


@app.get("/health")
async def health():
    return {"ok": True}


app.include_router(api_router, prefix="/api")
app.mount("/files", StaticFiles(directory=settings.ASSETS_DIR, check_dir=False), name="files")


if __name__ == "__main__":
    import uvicorn

    logger.info(f"up:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
