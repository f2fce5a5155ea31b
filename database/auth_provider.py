import logging
from typing import Any, Dict, Optional

import httpx

from database.errors import AuthError, ProviderError

logger = logging.getLogger(__name__)


def _error_message(body: Any, default: str) -> str:
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return default


def split_session(body: Dict[str, Any]) -> Dict[str, Any]:
    """GoTrue 응답을 {user, session} 형태로 나눕니다. 세션이 없으면 session=None."""
    if "access_token" not in body:
        # 이메일 확인이 필요한 경우 user 객체만 내려옴
        return {"user": body.get("user", body), "session": None}
    session = {key: value for key, value in body.items() if key != "user"}
    return {"user": body.get("user") or {}, "session": session}


class AuthProvider:
    """Supabase(GoTrue) 인증 API 래퍼"""

    def __init__(self, url: str, api_key: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.auth_url = url.rstrip("/") + "/auth/v1"
        self.api_key = api_key
        self.transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, str]] = None,
        token: Optional[str] = None,
    ) -> httpx.Response:
        headers = {"apikey": self.api_key}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                return await client.request(
                    method, f"{self.auth_url}{path}", json=json, params=params, headers=headers
                )
            except httpx.HTTPError as e:
                raise ProviderError(f"Auth request failed: {e}") from e

    def _raise_for_error(self, response: httpx.Response, default: str):
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.status_code >= 500:
            raise ProviderError(_error_message(body, default), response.status_code)
        code = body.get("error_code") if isinstance(body, dict) else None
        raise AuthError(_error_message(body, default), response.status_code, code)

    async def sign_up(self, email: str, password: str, name: str) -> Dict[str, Any]:
        response = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": {"name": name}},
        )
        self._raise_for_error(response, "Registration failed")
        return split_session(response.json())

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        self._raise_for_error(response, "Invalid login credentials")
        return split_session(response.json())

    async def get_user(self, token: str) -> Dict[str, Any]:
        """토큰으로 사용자 조회 (매 요청마다 원격 검증)"""
        response = await self._request("GET", "/user", token=token)
        self._raise_for_error(response, "Invalid token")
        return response.json()

    async def sign_out(self, token: str) -> bool:
        response = await self._request("POST", "/logout", token=token)
        self._raise_for_error(response, "Logout failed")
        return True


def is_already_registered(error: AuthError) -> bool:
    if error.code in ("user_already_exists", "email_exists"):
        return True
    return "already registered" in error.message.lower()
