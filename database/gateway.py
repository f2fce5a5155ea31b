import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from database.errors import NotFoundError, ProviderError, ProviderValidationError

logger = logging.getLogger(__name__)

SINGLE_OBJECT = "application/vnd.pgrst.object+json"
# PostgREST: 단일 객체 요청인데 0개 또는 여러 행이 반환됨
NO_SINGLE_ROW = "PGRST116"
INVALID_TEXT = "22P02"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    text = str(value)
    if any(ch in text for ch in ',()"'):
        text = '"' + text.replace('"', '\\"') + '"'
    return text


def build_filters(filters: Optional[Dict[str, Any]]) -> List[Tuple[str, str]]:
    """
    컬럼 -> 값 조건을 PostgREST 쿼리 파라미터로 변환합니다.

    - 단일 값: ``col=eq.value`` (None 은 ``is.null``)
    - list / tuple: ``col=in.(a,b)``
    """
    params = []
    for column, value in (filters or {}).items():
        if isinstance(value, (list, tuple)):
            joined = ",".join(_format_value(v) for v in value)
            params.append((column, f"in.({joined})"))
        elif value is None:
            params.append((column, "is.null"))
        else:
            params.append((column, f"eq.{_format_value(value)}"))
    return params


class DatabaseGateway:
    """Supabase(PostgREST) 테이블 접근 래퍼"""

    def __init__(self, url: str, service_key: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.rest_url = url.rstrip("/") + "/rest/v1"
        self.headers = {
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
        }
        self.transport = transport

    async def _request(
        self,
        method: str,
        table: str,
        params: List[Tuple[str, str]],
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        request_headers = dict(self.headers)
        if headers:
            request_headers.update(headers)
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.request(
                    method,
                    f"{self.rest_url}/{table}",
                    params=params,
                    json=json,
                    headers=request_headers,
                )
            except httpx.HTTPError as e:
                raise ProviderError(f"Database request failed: {e}") from e
        return response

    def _raise_for_error(self, response: httpx.Response, single: bool = False):
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = {}
        code = body.get("code") if isinstance(body, dict) else None
        message = (body.get("message") if isinstance(body, dict) else None) or response.text or "Database error"

        if code == NO_SINGLE_ROW or (single and response.status_code == 406):
            raise NotFoundError(message, response.status_code, code)
        if code and code[:2] in ("22", "23"):
            raise ProviderValidationError(message, response.status_code, code)
        logger.error(f"Database error {response.status_code} ({code}): {message}")
        raise ProviderError(message, response.status_code, code)

    async def select_many(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Tuple[str, bool]] = None,
        limit: Optional[int] = None,
        columns: str = "*",
    ) -> List[dict]:
        params = [("select", columns)] + build_filters(filters)
        if order_by:
            column, ascending = order_by
            params.append(("order", f"{column}.{'asc' if ascending else 'desc'}"))
        if limit:
            params.append(("limit", str(limit)))

        response = await self._request("GET", table, params)
        self._raise_for_error(response)
        return response.json()

    async def select_one(self, table: str, filters: Dict[str, Any], columns: str = "*") -> dict:
        params = [("select", columns)] + build_filters(filters)
        response = await self._request("GET", table, params, headers={"Accept": SINGLE_OBJECT})
        try:
            self._raise_for_error(response, single=True)
        except ProviderValidationError as e:
            # 잘못된 형식의 id 로는 어떤 행도 찾을 수 없음
            if e.code == INVALID_TEXT:
                raise NotFoundError(e.message, e.status_code, e.code) from e
            raise
        return response.json()

    async def insert(self, table: str, row: Dict[str, Any]) -> dict:
        response = await self._request(
            "POST",
            table,
            [("select", "*")],
            json=row,
            headers={"Accept": SINGLE_OBJECT, "Prefer": "return=representation"},
        )
        self._raise_for_error(response)
        return response.json()

    async def update(self, table: str, filters: Dict[str, Any], patch: Dict[str, Any]) -> dict:
        params = [("select", "*")] + build_filters(filters)
        response = await self._request(
            "PATCH",
            table,
            params,
            json=patch,
            headers={"Accept": SINGLE_OBJECT, "Prefer": "return=representation"},
        )
        self._raise_for_error(response, single=True)
        return response.json()

    async def delete(self, table: str, filters: Dict[str, Any]) -> bool:
        response = await self._request(
            "DELETE",
            table,
            build_filters(filters),
            headers={"Prefer": "return=minimal"},
        )
        self._raise_for_error(response)
        return True
