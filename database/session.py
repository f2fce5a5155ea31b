from functools import lru_cache

from config import settings
from database.auth_provider import AuthProvider
from database.gateway import DatabaseGateway


@lru_cache()
def get_db() -> DatabaseGateway:
    # 서버 작업용 service role 키 사용
    return DatabaseGateway(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


@lru_cache()
def get_auth() -> AuthProvider:
    return AuthProvider(settings.SUPABASE_URL, settings.auth_key)
