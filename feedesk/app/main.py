# Fee Desk backend entrypoint: FastAPI app over the session ledger.

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from feedesk.app.api import dashboard
from feedesk.app.api import expenditures
from feedesk.app.api import invoices
from feedesk.app.core.errors import InconsistentLedgerError, RecordNotFoundError, StoreError, ValidationError
from feedesk.app.core.logging import configure_logging
from feedesk.app.core.settings import get_settings
from feedesk.app.db.base import Base
from feedesk.app.db.session import engine

settings = get_settings()
configure_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(invoices.router)
app.include_router(expenditures.router)
app.include_router(dashboard.router)


@app.exception_handler(ValidationError)
async def handle_validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.code, "message": str(exc)})


@app.exception_handler(RecordNotFoundError)
async def handle_not_found(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=404, content={"detail": f"{exc.kind.capitalize()} not found"})


@app.exception_handler(InconsistentLedgerError)
async def handle_inconsistent_ledger(request: Request, exc: InconsistentLedgerError):
    logger.error("Ledger may be inconsistent: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "inconsistent-ledger", "message": str(exc)})


@app.exception_handler(StoreError)
async def handle_store_error(request: Request, exc: StoreError):
    return JSONResponse(status_code=502, content={"detail": "store-unavailable", "message": str(exc)})


@app.get("/")
def read_root():
    return {"app": "Fee Desk backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}
