import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.security import HTTPAuthorizationCredentials
from starlette import status

from config import settings
from database.auth_provider import AuthProvider, is_already_registered
from database.errors import AuthError, ProviderError
from database.session import get_auth
from domain.auth import auth_schema
from security import bearer_scheme, get_current_user, to_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


async def _try_login(auth: AuthProvider, email: str, password: str) -> Optional[dict]:
    """가입 직후 바로 로그인 시도. 실패하면 None"""
    try:
        result = await auth.sign_in(email, password)
    except AuthError as e:
        logger.info(f"Automatic login after registration failed for {email}: {e.message}")
        return None
    return result if result["session"] else None


@router.post(
    "/register",
    response_model=auth_schema.AuthResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: auth_schema.RegisterRequest,
    response: Response,
    auth: AuthProvider = Depends(get_auth),
):
    """
    회원가입. 세션이 바로 발급되면 201, 이메일 확인이 필요하면 200 을 반환합니다.
    """
    try:
        result = await auth.sign_up(body.email, body.password, body.name)
    except AuthError as e:
        if settings.AUTO_LOGIN_ON_REGISTER and is_already_registered(e):
            logged_in = await _try_login(auth, body.email, body.password)
            if logged_in:
                response.status_code = status.HTTP_200_OK
                return auth_schema.AuthResponse(
                    message="Account already exists. Logged in successfully",
                    user=to_user(logged_in["user"]),
                    session=logged_in["session"],
                )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    if result["session"] is None and settings.AUTO_LOGIN_ON_REGISTER:
        logged_in = await _try_login(auth, body.email, body.password)
        if logged_in:
            result = logged_in

    if result["session"] is None:
        response.status_code = status.HTTP_200_OK
        return auth_schema.AuthResponse(
            message="Registration successful. Please check your email to confirm your account.",
            requiresEmailConfirmation=True,
            user=to_user(result["user"]),
        )

    return auth_schema.AuthResponse(
        message="User registered successfully",
        user=to_user(result["user"]),
        session=result["session"],
    )


@router.post("/login", response_model=auth_schema.AuthResponse, response_model_exclude_none=True)
async def login(body: auth_schema.LoginRequest, auth: AuthProvider = Depends(get_auth)):
    try:
        result = await auth.sign_in(body.email, body.password)
    except AuthError as e:
        logger.info(f"Login failed for {body.email}: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return auth_schema.AuthResponse(
        message="Login successful",
        user=to_user(result["user"]),
        session=result["session"],
    )


@router.post("/logout", response_model=auth_schema.MessageResponse)
async def logout(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthProvider = Depends(get_auth),
):
    """전달된 토큰이 있으면 인증 서버에서 세션을 폐기합니다."""
    if credentials is not None and credentials.credentials:
        try:
            await auth.sign_out(credentials.credentials)
        except ProviderError as e:
            logger.warning(f"Session revocation failed: {e.message}")
    return {"message": "Logged out successfully"}


@router.get("/me")
async def me(current_user: auth_schema.CurrentUser = Depends(get_current_user)):
    """현재 로그인한 사용자 정보 조회"""
    return {"user": auth_schema.User(**current_user.model_dump(exclude={"access_token"}))}
