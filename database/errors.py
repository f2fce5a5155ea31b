from typing import Optional


class ProviderError(Exception):
    """Supabase 호출 실패 (예상하지 못한 오류는 500으로 처리)"""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class NotFoundError(ProviderError):
    """조건에 맞는 행이 없거나 하나가 아님 (PGRST116)"""


class ProviderValidationError(ProviderError):
    """제약 조건 위반 (Postgres 22xxx / 23xxx)"""


class AuthError(ProviderError):
    """인증 서버가 요청을 거부함"""
