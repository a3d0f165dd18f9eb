from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(prefix="/api", tags=["Root"])


@router.get("/")
def root():
    return {"message": f"{settings.app_name} running", "docs": "/docs", "frameworks": "/api/frameworks"}
