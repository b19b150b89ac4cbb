# File: wpquery/routers/health.py | Version: 1.1 | Title: Health & readiness endpoints
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wpquery.db.session import get_db

router = APIRouter(tags=["Health"])


@router.get("/healthz")
def healthz() -> dict:
    """
    Liveness probe: returns 200 if the app can serve requests.
    """
    return {"status": "ok"}


@router.get("/readyz")
def readyz(db: Session = Depends(get_db)):
    """
    Readiness probe: 200 if the work package store answers SELECT 1, else 503.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "db": "ok"}
    except SQLAlchemyError:  # pragma: no cover
        return JSONResponse({"status": "degraded", "db": "error"}, status_code=503)
