# app/routers/auth.py
import hmac

from pydantic import BaseModel
from fastapi import APIRouter

from app.core.config import settings
from app.auth.jwt import create_access_token
from app.core import AppError, ErrorCode, ErrorReason

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in_minutes: int


def _matches(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


@router.post("/login", response_model=LoginResponse)
def login(req: LoginRequest) -> LoginResponse:
    # evaluate both so timing does not reveal which one was wrong
    user_ok = _matches(req.username, settings.ADMIN_USERNAME)
    pass_ok = _matches(req.password, settings.ADMIN_PASSWORD)
    if not (user_ok and pass_ok):
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            reason=ErrorReason.AUTH_INVALID.value,
            message="Invalid credentials",
            status_code=401,
        )

    return LoginResponse(
        access_token=create_access_token(subject=settings.ADMIN_USERNAME),
        expires_in_minutes=settings.JWT_ACCESS_TOKEN_EXPIRES_MINUTES,
    )
