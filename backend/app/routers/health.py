from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.api.deps import get_db, get_fetcher
from app.sheets.fetcher import SheetsFetcher

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/db/health")
def db_health(db: Session = Depends(get_db)):
    db.execute(text("select 1"))
    return {"status": "ok", "db": "connected"}


@router.get("/sheets/health")
def sheets_health(fetcher: SheetsFetcher = Depends(get_fetcher)):
    """Config only; does not call Google."""
    return {
        "status": "ok",
        "public_export": True,
        "service_account": fetcher.has_credentials,
    }
