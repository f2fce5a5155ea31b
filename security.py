import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette import status

from database.auth_provider import AuthProvider
from database.errors import AuthError
from database.session import get_auth
from domain.auth import auth_schema

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def to_user(provider_user: dict) -> auth_schema.User:
    """인증 서버의 사용자 객체를 API 응답용 User 로 변환"""
    metadata = provider_user.get("user_metadata") or {}
    email = provider_user.get("email") or ""
    return auth_schema.User(
        id=provider_user["id"],
        email=email,
        name=metadata.get("name") or email,
        birth_date=metadata.get("birth_date"),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthProvider = Depends(get_auth),
) -> auth_schema.CurrentUser:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = credentials.credentials
    try:
        provider_user = await auth.get_user(token)
    except AuthError as e:
        logger.info(f"Token rejected by auth provider: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = to_user(provider_user)
    return auth_schema.CurrentUser(**user.model_dump(), access_token=token)
