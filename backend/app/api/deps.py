from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.framework_service import FrameworkService
from app.services.sync_service import SyncService
from app.sheets.fetcher import SheetsFetcher


def get_db() -> Generator[Session, None, None]:
    """
    Yields a DB session per request.
    Ensures the session is closed even on exceptions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_fetcher() -> SheetsFetcher:
    """Override in tests to avoid network access."""
    return SheetsFetcher()


def get_framework_service(db: Session = Depends(get_db)) -> FrameworkService:
    return FrameworkService(db=db)


def get_sync_service(fetcher: SheetsFetcher = Depends(get_fetcher)) -> SyncService:
    """
    Sync opens its own sessions (one per source), so it takes the session
    factory rather than the request session.
    """
    return SyncService(session_factory=SessionLocal, fetcher=fetcher)
